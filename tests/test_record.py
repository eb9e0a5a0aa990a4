import unittest

from rfcgraph.index.record import RecordParseError, parse_record


HTTP_SEMANTICS = """9110 HTTP Semantics. R. Fielding, Ed., M. Nottingham, Ed., J. Reschke,
     Ed.. June 2022. (Format: HTML, TXT, PDF, XML) (Obsoletes RFC2818,
     RFC7230, RFC7231, RFC7232, RFC7233, RFC7235, RFC7538, RFC7615,
     RFC7694) (Updates RFC3864) (Also STD0097) (Status: INTERNET
     STANDARD) (DOI: 10.17487/RFC9110) """.split("\n")

HTTP_MESSAGING = """7230 Hypertext Transfer Protocol (HTTP/1.1): Message Syntax and Routing.
     R. Fielding, Ed., J. Reschke, Ed.. June 2014. (Format: TXT, HTML)
     (Obsoletes RFC2145, RFC2616) (Obsoleted by RFC9110, RFC9112)
     (Updates RFC2817, RFC2818) (Updated by RFC8615) (Status: PROPOSED
     STANDARD) (DOI: 10.17487/RFC7230) """.split("\n")


class TestParseRecord(unittest.TestCase):
    def test_updates_and_obsoletes(self):
        rec = parse_record(HTTP_SEMANTICS)
        self.assertIsNotNone(rec)
        self.assertEqual(rec.number, 9110)
        self.assertEqual(rec.title, "HTTP Semantics")
        self.assertEqual(rec.published, 202206)
        self.assertEqual(rec.obsoletes, (2818, 7230, 7231, 7232, 7233, 7235, 7538, 7615, 7694))
        self.assertEqual(rec.updates, (3864,))
        self.assertEqual(rec.updated_by, ())
        self.assertEqual(rec.obsoleted_by, ())

    def test_updated_by_and_obsoleted_by(self):
        rec = parse_record(HTTP_MESSAGING)
        self.assertIsNotNone(rec)
        self.assertEqual(rec.number, 7230)
        self.assertEqual(rec.title, "Hypertext Transfer Protocol (HTTP/1.1): Message Syntax and Routing")
        self.assertEqual(rec.published, 201406)
        self.assertEqual(rec.obsoletes, (2145, 2616))
        self.assertEqual(rec.obsoleted_by, (9110, 9112))
        self.assertEqual(rec.updates, (2817, 2818))
        self.assertEqual(rec.updated_by, (8615,))

    def test_not_issued(self):
        self.assertIsNone(parse_record(["4999 Not Issued. "]))
        self.assertIsNone(parse_record(["4999 Not Issued."]))

    def test_digits_in_title_not_confused_with_number(self):
        rec = parse_record(["2616 Hypertext Transfer Protocol -- HTTP/1.1. R. Fielding. June 1999. (Obsoletes RFC2068) "])
        self.assertEqual(rec.number, 2616)
        self.assertEqual(rec.title, "Hypertext Transfer Protocol -- HTTP/1.1")
        self.assertEqual(rec.obsoletes, (2068,))

    def test_leading_zeros(self):
        rec = parse_record(["0001 Host Software. S. Crocker. April 1969. (Format: TXT, HTML) "])
        self.assertEqual(rec.number, 1)
        self.assertEqual(rec.published, 196904)
        self.assertEqual(rec.url, "https://www.rfc-editor.org/rfc/rfc1")

    def test_day_prefixed_date(self):
        rec = parse_record(["8774 Quantum Internet Protocol. M. Welzl. 1 April 2020. (Format: HTML, TXT) "])
        self.assertEqual(rec.published, 202004)
        self.assertEqual(rec.year, "2020")

    def test_unreadable_date_is_zero(self):
        rec = parse_record(["1234 Something. Someone. Sometime. (Updates RFC1000) "])
        self.assertEqual(rec.published, 0)
        self.assertEqual(rec.updates, (1000,))

    def test_last_clause_of_a_kind_wins(self):
        rec = parse_record(["1300 Title. A. Author. March 1992. (Updates RFC1000) (Updates RFC1100, RFC1200) "])
        self.assertEqual(rec.updates, (1100, 1200))

    def test_other_clauses_ignored(self):
        rec = parse_record(HTTP_SEMANTICS)
        for rel in (rec.updates, rec.updated_by, rec.obsoletes, rec.obsoleted_by):
            self.assertNotIn(97, rel)
            self.assertNotIn(9110, rel)

    def test_relations_are_immutable(self):
        rec = parse_record(HTTP_MESSAGING)
        with self.assertRaises(AttributeError):
            rec.updates.append(1)
        self.assertEqual(hash(rec), hash(parse_record(HTTP_MESSAGING)))

    def test_malformed_header_raises(self):
        with self.assertRaises(RecordParseError) as cm:
            parse_record(["Host Software. S. Crocker. April 1969. "])
        self.assertIn("Host Software", cm.exception.block)


if __name__ == "__main__":
    unittest.main()
