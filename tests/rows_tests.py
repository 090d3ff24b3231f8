import io
import unittest

from usx2csv import Row, VerseState, chapterkey, csvbytes, makerow, sortrows, writecsv


def row(book="GEN", chapter="1", verse="1", text="text"):
    return Row(book, chapter, verse, text, text, "", "", "")


class TestVerseState(unittest.TestCase):

    def test_addtext_separates_with_one_space(self):
        state = VerseState(verse="1")
        state.addtext("In the")
        state.addtext("")
        state.addtext("beginning", "<wj>beginning</wj>")
        self.assertEqual(state.plain, "In the beginning")
        self.assertEqual(state.styled, "In the <wj>beginning</wj>")

    def test_reset_keeps_subtitle(self):
        state = VerseState(book="GEN", chapter="1", verse="1", subtitle="Creation")
        state.addtext("text")
        state.footnotes.append("note")
        state.crossrefs.append("ref")
        state.reset("2")
        self.assertEqual(state.verse, "2")
        self.assertEqual(state.plain, "")
        self.assertEqual(state.styled, "")
        self.assertEqual(state.footnotes, [])
        self.assertEqual(state.crossrefs, [])
        self.assertEqual(state.subtitle, "Creation")
        self.assertEqual(state.chapter, "1")

    def test_heading_waits_for_open_verse(self):
        state = VerseState(subtitle="Old")
        state.setsubtitle("Closed")
        self.assertEqual(state.subtitle, "Closed")
        state.reset("1")
        state.setsubtitle("New")
        state.setsubtitle("")
        self.assertEqual(state.subtitle, "Closed")
        state.reset("2")
        self.assertEqual(state.subtitle, "New")


class TestMakeRow(unittest.TestCase):

    def test_row(self):
        state = VerseState(book="GEN", chapter="1", verse="1", subtitle=" Creation ")
        state.addtext("In the beginning")
        state.footnotes.extend(["one", "two"])
        state.crossrefs.append("Jn 1:1")
        self.assertEqual(
            makerow(state),
            Row("GEN", "1", "1", "In the beginning", "In the beginning", "one | two", "Jn 1:1", "Creation"),
        )

    def test_missing_fields(self):
        for fields in (
            {"chapter": "1", "verse": "1"},
            {"book": "GEN", "verse": "1"},
            {"book": "GEN", "chapter": "1"},
        ):
            state = VerseState(**fields)
            state.addtext("text")
            self.assertIsNone(makerow(state))

    def test_blank_text(self):
        state = VerseState(book="GEN", chapter="1", verse="1", plain="   ", styled="<wj></wj>")
        self.assertIsNone(makerow(state))


class TestSortRows(unittest.TestCase):

    def test_book_then_chapter_then_verse(self):
        rows = [
            row("REV", "1", "1"),
            row("GEN", "10", "1"),
            row("GEN", "2", "2"),
            row("GEN", "2", "10"),
            row("GEN", "2", "1a"),
        ]
        self.assertEqual(
            [(_.book, _.chapter, _.verse) for _ in sortrows(rows)],
            [
                ("GEN", "2", "10"),
                ("GEN", "2", "1a"),
                ("GEN", "2", "2"),
                ("GEN", "10", "1"),
                ("REV", "1", "1"),
            ],
        )

    def test_bad_chapter_sorts_first(self):
        rows = [row(chapter="1"), row(chapter="intro")]
        self.assertEqual([_.chapter for _ in sortrows(rows)], ["intro", "1"])

    def test_chapter_must_be_plain_digits(self):
        self.assertEqual(chapterkey("12"), 12)
        for chapter in (" 3", "1_0", "٣", "-1", ""):
            self.assertEqual(chapterkey(chapter), 0)

    def test_ties_keep_order(self):
        rows = [row(text="first"), row(text="second"), row(chapter="x", text="third")]
        self.assertEqual(
            [_.textplain for _ in sortrows(rows)], ["third", "first", "second"]
        )


class TestCsv(unittest.TestCase):

    def test_header_and_escaping(self):
        buf = io.StringIO()
        writecsv(
            buf,
            [Row("GEN", "1", "1", 'He said, "Let"', "<wj>x</wj>", "a | b", "", "Creation")],
        )
        self.assertEqual(
            buf.getvalue(),
            "Book,Chapter,Verse,TextPlain,TextStyled,Footnotes,Crossrefs,Subtitle\n"
            'GEN,1,1,"He said, ""Let""",<wj>x</wj>,a | b,,Creation\n',
        )

    def test_csvbytes(self):
        self.assertEqual(
            csvbytes([row(text="Caf\xe9")]).decode("utf_8").splitlines()[1],
            "GEN,1,1,Caf\xe9,Caf\xe9,,,",
        )


if __name__ == "__main__":
    unittest.main()
