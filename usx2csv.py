#!/usr/bin/env python3

r"""
Convert usx and usfm bibles to csv.

Notes:
   * output is one row per verse:
         Book,Chapter,Verse,TextPlain,TextStyled,Footnotes,Crossrefs,Subtitle

   * only the \ft text of footnotes and cross references is kept. caller
     and reference labels are dropped.

   * superscript text (\sup and char style sup) is dropped.

   * unknown char styles in usx files are wrapped in <span> tags. unknown
     character markers in usfm files are stripped without a tag.

   * verses without any text are dropped.

   * rows are sorted by book, then chapter number, then verse. verse
     numbers are compared as strings, so 10 sorts before 2.

This script is public domain. You may do whatever you want with it.

"""

# make pylint happier..
# pylint: disable=too-many-branches
# pylint: disable=too-many-locals
# pylint: disable=consider-using-f-string

import concurrent.futures
import csv
import io
import json
import logging
import os.path
import re
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, ArgumentTypeError
from codecs import lookup
from dataclasses import dataclass, field
from functools import partial
from glob import glob
from sys import exit as sysexit
from typing import Any, NamedTuple

import lxml.etree as et  # nosec

# -------------------------------------------------------------------------- #

META = {
    "USFM": "3.0",  # Targeted USFM version
    "USX": "3.0",  # Targeted USX version
    "VERSION": "0.3",  # THIS SCRIPT version
    "DATE": "2026-10-19",  # THIS SCRIPT revision date
}

# -------------------------------------------------------------------------- #

CSVHEADER = (
    "Book",
    "Chapter",
    "Verse",
    "TextPlain",
    "TextStyled",
    "Footnotes",
    "Crossrefs",
    "Subtitle",
)

# separates multiple footnotes or cross references in a single field
NOTESEP = " | "

# supported file extensions and the format name used for each
SUPPORTED = {
    ".usx": "usx",
    ".usfm": "usfm",
    ".sfm": "sfm",
}

# character styles and the tags used for them in TextStyled
STYLETAGS = {
    "wj": "wj",
    "add": "add",
    "nd": "nd",
    "it": "i",
    "bd": "b",
    "bdit": "bdit",
}

# tag used in usx files for char styles not in STYLETAGS
FALLBACKTAG = "span"

# paragraph styles that set the subtitle
SUBTITLESTYLES = {"s", "s1", "s2", "s3", "sp", "ms", "mr", "mt", "mt1", "mt2"}

# markers handled by the usfm converter. anything else found in a file is
# reported as stripped.
HANDLEDTAGS = {
    r"\id",
    r"\c",
    r"\v",
    r"\s",
    r"\s1",
    r"\s2",
    r"\s3",
    r"\s4",
    r"\sp",
    r"\ms",
    r"\ms1",
    r"\ms2",
    r"\ms3",
    r"\mr",
    r"\mt",
    r"\mt1",
    r"\mt2",
    r"\mt3",
    r"\mt4",
    r"\m",
    r"\p",
    r"\pi",
    r"\q",
    r"\q0",
    r"\q1",
    r"\q2",
    r"\q3",
    r"\q4",
    r"\qt",
    r"\qt0",
    r"\qt1",
    r"\qt2",
    r"\qt3",
    r"\qt4",
    r"\f",
    r"\f*",
    r"\fe",
    r"\fe*",
    r"\x",
    r"\x*",
    r"\ft",
    r"\sup",
    r"\sup*",
    r"\+sup",
    r"\+sup*",
}
HANDLEDTAGS.update(
    _.format(key)
    for key in STYLETAGS
    for _ in (r"\{}", r"\{}*", r"\+{}", r"\+{}*")
)

# -------------------------------------------------------------------------- #
# REGULAR EXPRESSIONS

# create a function to squeeze all whitespace into a single space.
SQUEEZE = partial(re.sub, r"\s+", " ")

# book id from \id line
IDRE = re.compile(r"^\\id\s+(\S+)", re.I)

# encoding from \ide line
IDERE = re.compile(r"^\\ide\s+(\S+)", re.I | re.M)

# chapter marker lines
CHAPTERRE = re.compile(r"^\\c\s+(\d+)\b", re.I)

# heading marker lines
HEADINGRE = re.compile(
    r"""
        # heading tag in named group 'tag'
        ^\\(?P<tag>s\d?|sp|ms\d?|mr|mt\d?)

        # the tag must not run on into a longer tag name
        (?![a-z0-9])

        # heading text
        \s*(?P<text>.*)$
    """,
    re.I + re.VERBOSE,
)

# verse marker lines
VERSERE = re.compile(
    r"""
        ^\\v\s+

        # verse number, possibly with a letter suffix or as a range
        (?P<verse>\d+[a-z]?(?:[-,]\d+[a-z]?)*)

        # remainder of the line is verse text
        \s*(?P<text>.*)$
    """,
    re.I + re.VERBOSE,
)

# paragraph and poetry marker lines
PARARE = re.compile(
    r"""
        ^\\(?P<tag>m|p|pi|q[0-4]?|qt[0-4]?)
        (?![a-z0-9])
        \s*(?P<text>.*)$
    """,
    re.I + re.VERBOSE,
)

# superscript spans
SUPRE = re.compile(r"\\\+?sup\b.*?\\\+?sup\*", re.I | re.S)

# footnotes and endnotes. the end tag must match the start tag.
FOOTNOTERE = re.compile(
    r"""
        \\(?P<tag>fe|f)\b
        (?P<note>.*?)
        \\(?P=tag)\*
    """,
    re.I + re.S + re.VERBOSE,
)

# cross references
CROSSREFRE = re.compile(r"\\x\b(?P<note>.*?)\\x\*", re.I | re.S)

# footnote text inside a note
FTRE = re.compile(r"\\ft\b([^\\]*)", re.I)

# word level attributes such as |strong="H1234" just before a closing tag
ATTRIBRE = re.compile(r"\|[^\\|]*(?=\\\+?[a-z0-9]+\*)", re.I)

# any usfm marker
MARKERRE = re.compile(r"\\\+?[a-z0-9]+\*?", re.I)

# opening and closing markers for each mapped character style
STYLERE = tuple(
    (
        re.compile(r"\\\+?{}\*".format(key), re.I),
        re.compile(r"\\\+?{}\b\s*".format(key), re.I),
        tag,
    )
    for key, tag in STYLETAGS.items()
)

# characters that mark a wildcard in an input path
WILDCARDRE = re.compile(r"[*?\[\]]")

# -------------------------------------------------------------------------- #

# logging.basicConfig(format="%(levelname)s: %(message)s")
logging.basicConfig(format="%(message)s")
LOG = logging.getLogger(__name__)
LOG.setLevel(logging.WARNING)

# -------------------------------------------------------------------------- #


class StructuralParseError(ValueError):
    """A usx file could not be read as a usx document."""


class InputError(ValueError):
    """Input paths could not be resolved to files to convert."""


class Row(NamedTuple):
    """A single verse of output."""

    book: str
    chapter: str
    verse: str
    textplain: str
    textstyled: str
    footnotes: str
    crossrefs: str
    subtitle: str


@dataclass
class ElementNode:
    """Element in a usx document tree."""

    name: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Any] = field(default_factory=list)

    def get(self, attr: str) -> str:
        """Get attribute value, or an empty string."""
        return self.attrs.get(attr, "")


@dataclass
class TextNode:
    """Text in a usx document tree."""

    text: str


@dataclass
class VerseState:
    """
    Verse accumulator.

    Holds everything collected for the verse that is currently open. One
    instance is used per file. The subtitle survives reset() and is only
    replaced when a new heading is found. A heading found while a verse is
    open takes effect when that verse is closed.

    """

    book: str = ""
    chapter: str = ""
    verse: str = ""
    plain: str = ""
    styled: str = ""
    footnotes: list[str] = field(default_factory=list)
    crossrefs: list[str] = field(default_factory=list)
    subtitle: str = ""
    nextsubtitle: str = ""
    # opening tags not yet followed by any text
    pending: str = ""

    def reset(self, verse: str = "") -> None:
        """Start a new verse, or close the current one if verse is empty."""
        self.verse = verse
        self.plain = ""
        self.styled = ""
        self.footnotes = []
        self.crossrefs = []
        self.pending = ""
        if self.nextsubtitle:
            self.subtitle = self.nextsubtitle
            self.nextsubtitle = ""

    def setsubtitle(self, subtitle: str) -> None:
        """Set the subtitle from a heading. Empty headings are ignored."""
        if not subtitle:
            return
        if self.verse:
            self.nextsubtitle = subtitle
        else:
            self.subtitle = subtitle

    def addtext(self, plain: str, styled: str | None = None) -> None:
        """Append text to the verse, separated by a single space."""
        if not plain:
            return
        if self.plain:
            self.plain += " "
            self.styled += " "
        self.plain += plain
        self.styled += self.pending + (plain if styled is None else styled)
        self.pending = ""

    def opentag(self, tag: str) -> None:
        """Open a tag in the styled text."""
        self.pending += f"<{tag}>"

    def closetag(self, tag: str) -> None:
        """Close a tag in the styled text."""
        self.styled += f"{self.pending}</{tag}>"
        self.pending = ""


# -------------------------------------------------------------------------- #


def squeeze(text: str) -> str:
    """Collapse whitespace runs to single spaces and strip the ends."""
    return SQUEEZE(text).strip()


def getstyletag(style: str) -> str:
    """Get the tag used for a usx char style."""
    return STYLETAGS.get(style, FALLBACKTAG)


def getbookid(text: str, fname: str = "") -> str:
    """Get book id from \\id line, or from the file name if there is none."""
    for line in text.split("\n"):
        match = IDRE.match(line.strip())
        if match is not None:
            return match.group(1)
    return os.path.splitext(os.path.basename(fname))[0]


def textencoding(name: str) -> str:
    """Get the codec name for a text encoding."""
    codec = lookup(name)
    # base64, zip, rot13 and friends are codecs but not text encodings
    if not getattr(codec, "_is_text_encoding", True):
        raise LookupError(f"{name!r} is not a text encoding")
    return codec.name


def getencoding(data: bytes) -> str:
    """Get encoding from \\ide line. Default to utf_8_sig."""
    match = IDERE.search(data.decode("ascii", "replace"))
    if match is None:
        return "utf_8_sig"
    try:
        bookencoding = textencoding(match.group(1))
    except LookupError:
        LOG.warning(r"Unknown encoding in \ide line: %s. Using utf-8.", match.group(1))
        return "utf_8_sig"
    # use utf_8_sig in place of utf_8 encoding so that a Byte Order Mark
    # at the start of the file is dropped.
    return "utf_8_sig" if bookencoding.replace("-", "_") == "utf_8" else bookencoding


def makerow(state: VerseState) -> Row | None:
    """
    Reduce the verse accumulator to a row.

    Returns None when there is no book, chapter, verse, or text.

    """
    plain = state.plain.strip()
    if not (state.book and state.chapter and state.verse and plain):
        return None
    return Row(
        state.book,
        state.chapter,
        state.verse,
        plain,
        state.styled.strip(),
        NOTESEP.join(state.footnotes),
        NOTESEP.join(state.crossrefs),
        state.subtitle.strip(),
    )


def flushverse(state: VerseState, rows: list[Row]) -> None:
    """Add the current verse to rows if it has any text."""
    row = makerow(state)
    if row is not None:
        rows.append(row)
    else:
        LOG.debug("Dropped empty verse %s %s:%s", state.book, state.chapter, state.verse)


def chapterkey(chapter: str) -> int:
    """Chapter sort key. Anything that isn't a plain number sorts as 0."""
    if chapter.isascii() and chapter.isdigit():
        return int(chapter)
    return 0


def sortrows(rows: list[Row]) -> list[Row]:
    """Sort rows by book, chapter number, and verse string."""
    return sorted(rows, key=lambda _: (_.book, chapterkey(_.chapter), _.verse))


# -------------------------------------------------------------------------- #
# USX


def usx_maketree(elem: Any) -> ElementNode:
    """Copy an lxml element and everything inside it into our own nodes."""
    node = ElementNode(
        et.QName(elem).localname,
        {et.QName(key).localname: value for key, value in elem.attrib.items()},
    )
    if elem.text:
        node.children.append(TextNode(elem.text))
    for child in elem:
        # comments and processing instructions are dropped, but not the
        # text that follows them.
        if isinstance(child.tag, str):
            node.children.append(usx_maketree(child))
        if child.tail:
            node.children.append(TextNode(child.tail))
    return node


def usx_buildtree(data: bytes, fname: str = "") -> ElementNode:
    """Parse usx data into a document tree."""
    parser = et.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        root = et.fromstring(data, parser)  # nosec
    except et.XMLSyntaxError as err:
        raise StructuralParseError(f"Malformed XML in {fname or 'input'}: {err}") from err
    return usx_maketree(root)


def usx_innertext(node: Any) -> str:
    """Get all text inside a node."""
    if isinstance(node, TextNode):
        return node.text
    return "".join(usx_innertext(_) for _ in node.children)


def usx_findft(node: ElementNode) -> ElementNode | None:
    """Find the first char element with the ft style."""
    if node.name == "char" and node.get("style") == "ft":
        return node
    for child in node.children:
        if isinstance(child, ElementNode):
            found = usx_findft(child)
            if found is not None:
                return found
    return None


def usx_note(node: ElementNode, state: VerseState) -> None:
    """Store the ft text of a note as a footnote or cross reference."""
    ftnode = usx_findft(node)
    if ftnode is None:
        return
    ftext = squeeze(usx_innertext(ftnode))
    if not ftext:
        return
    if node.get("style").startswith("x"):
        state.crossrefs.append(ftext)
    else:
        state.footnotes.append(ftext)


def usx_walk(node: Any, state: VerseState, rows: list[Row]) -> None:
    """Walk a usx node, updating state and adding finished verses to rows."""
    if isinstance(node, TextNode):
        if state.verse:
            state.addtext(squeeze(node.text))
        return

    if node.name == "chapter":
        state.chapter = node.get("number")
        return

    if node.name == "verse":
        # verse start milestone
        if node.get("sid"):
            state.reset(node.get("number"))
            return
        # verse end milestone
        if node.get("eid"):
            flushverse(state, rows)
            state.reset()
            return

    elif node.name == "note":
        usx_note(node, state)
        return

    elif node.name == "para":
        if node.get("style") in SUBTITLESTYLES:
            state.setsubtitle(squeeze(usx_innertext(node)))

    elif node.name == "char":
        style = node.get("style")
        if style == "sup":
            return
        tag = getstyletag(style) if style else ""
        if state.verse and tag:
            state.opentag(tag)
        for child in node.children:
            usx_walk(child, state, rows)
        if state.verse and tag:
            state.closetag(tag)
        return

    for child in node.children:
        usx_walk(child, state, rows)


def usx2rows(data: bytes, fname: str = "") -> list[Row]:
    """Convert usx data to a sorted list of rows."""
    root = usx_buildtree(data, fname)
    if root.name != "usx":
        raise StructuralParseError(f"No <usx> root found in {fname or 'input'}")

    book = next(
        (_ for _ in root.children if isinstance(_, ElementNode) and _.name == "book"),
        None,
    )
    if book is None:
        raise StructuralParseError(f"No <book> found in {fname or 'input'}")

    rows: list[Row] = []
    state = VerseState(book=book.get("code"))
    for child in root.children:
        usx_walk(child, state, rows)
    return sortrows(rows)


# -------------------------------------------------------------------------- #
# USFM


def usfm_ft(notetext: str) -> str:
    """Get the \\ft text from a footnote or cross reference."""
    match = FTRE.search(notetext)
    return "" if match is None else squeeze(match.group(1))


def usfm_notes(segment: str) -> tuple[str, list[str], list[str]]:
    """
    Remove footnotes and cross references from text.

    Returns the remaining text along with the ft text of the footnotes and
    of the cross references that were removed.

    """
    footnotes: list[str] = []
    crossrefs: list[str] = []

    def notefunc(notes: list[str], match: re.Match) -> str:
        ftext = usfm_ft(match.group("note"))
        if ftext:
            notes.append(ftext)
        return " "

    text = FOOTNOTERE.sub(partial(notefunc, footnotes), segment)
    text = CROSSREFRE.sub(partial(notefunc, crossrefs), text)
    return text, footnotes, crossrefs


def usfm_heading(text: str) -> str:
    """Get subtitle text from a heading line."""
    text = usfm_notes(ATTRIBRE.sub("", text))[0]
    return squeeze(MARKERRE.sub(" ", text))


def usfm_segment(segment: str, state: VerseState) -> None:
    """Add a piece of usfm verse text to the current verse."""
    if not segment.strip():
        return

    text = ATTRIBRE.sub("", SUPRE.sub(" ", segment))
    text, footnotes, crossrefs = usfm_notes(text)
    state.footnotes.extend(footnotes)
    state.crossrefs.extend(crossrefs)
    if not text.strip():
        return

    # closing markers first so that \wj* is not mistaken for \wj
    styled = text
    for closere, openre, tag in STYLERE:
        styled = closere.sub(f"</{tag}>", styled)
        styled = openre.sub(f"<{tag}>", styled)

    state.addtext(squeeze(MARKERRE.sub(" ", text)), squeeze(MARKERRE.sub(" ", styled)))


def usfm_lines(text: str, bookid: str) -> list[Row]:
    """
    Process usfm lines.

    Lines are checked in this order: chapter, heading, verse, paragraph.
    Any other line is verse text if a verse is open, and ignored otherwise.

    """
    rows: list[Row] = []
    state = VerseState(book=bookid)

    for line in (_.strip() for _ in text.split("\n")):
        if not line:
            continue

        match = CHAPTERRE.match(line)
        if match is not None:
            if state.verse:
                flushverse(state, rows)
            state.reset()
            state.chapter = match.group(1)
            continue

        match = HEADINGRE.match(line)
        if match is not None:
            state.setsubtitle(usfm_heading(match.group("text")))
            continue

        match = VERSERE.match(line)
        if match is not None:
            if state.verse:
                flushverse(state, rows)
            state.reset(match.group("verse"))
            usfm_segment(match.group("text"), state)
            continue

        match = PARARE.match(line)
        if match is not None:
            if state.verse:
                usfm_segment(match.group("text"), state)
            continue

        if state.verse:
            usfm_segment(line, state)

    if state.verse:
        flushverse(state, rows)

    return rows


def usfm2rows(data: bytes, fname: str = "", fencoding: str | None = None) -> list[Row]:
    """Convert usfm data to a sorted list of rows."""
    bookencoding = getencoding(data)
    if fencoding is not None:
        try:
            bookencoding = textencoding(fencoding)
        except LookupError:
            LOG.warning("Unknown encoding: %s. Using %s.", fencoding, bookencoding)
    if bookencoding.replace("-", "_") == "utf_8":
        bookencoding = "utf_8_sig"
    text = data.decode(bookencoding, "replace").replace("\r\n", "\n").replace("\r", "\n")

    bookid = getbookid(text, fname)
    LOG.debug("... Processing %s ...", bookid)
    rows = usfm_lines(text, bookid)

    # report markers that were stripped from the text
    usfmtagset = {_.lower() for _ in MARKERRE.findall(text)}.difference(HANDLEDTAGS)
    if usfmtagset:
        LOG.info("Stripped USFM Tags: %s", ", ".join(sorted(usfmtagset)))

    return sortrows(rows)


# -------------------------------------------------------------------------- #


def getformat(fname: str) -> str | None:
    """Get the input format for a file name, or None if unsupported."""
    return SUPPORTED.get(os.path.splitext(fname)[1].lower())


def convertdata(fname: str, data: bytes, fencoding: str | None = None) -> list[Row]:
    """Convert file contents to rows based on the file extension."""
    fmt = getformat(fname)
    if fmt is None:
        raise InputError(f"Unsupported file type: {fname}")
    if fmt == "usx":
        return usx2rows(data, fname)
    return usfm2rows(data, fname, fencoding)


def writecsv(ofile: Any, rows: list[Row]) -> None:
    """Write header and rows to a text stream."""
    writer = csv.writer(ofile, lineterminator="\n")
    writer.writerow(CSVHEADER)
    writer.writerows(rows)


def csvbytes(rows: list[Row]) -> bytes:
    """Get csv output for rows as utf-8 bytes."""
    buf = io.StringIO()
    writecsv(buf, rows)
    return buf.getvalue().encode("utf_8")


def outputpath(fname: str, outdir: str | None = None) -> str:
    """Get the csv file name for an input file."""
    base = os.path.splitext(fname)[0]
    if outdir:
        return os.path.join(outdir, f"{os.path.basename(base)}.csv")
    return f"{base}.csv"


def collectfiles(items: list[str]) -> list[str]:
    """
    Resolve input items to a list of files.

    Items may be comma separated lists, wildcards, folders, or files.
    Folders are not searched recursively.

    """
    paths: list[str] = []
    for item in (_.strip() for __ in items for _ in __.split(",")):
        if not item:
            continue
        if WILDCARDRE.search(item) is not None:
            matches = sorted(glob(item))
            if not matches:
                raise InputError(f"Input path not found: {item}")
            paths.extend(matches)
        elif not os.path.exists(item):
            raise InputError(f"Input path not found: {item}")
        else:
            paths.append(item)

    files: list[str] = []
    for item in paths:
        if os.path.isdir(item):
            files.extend(
                os.path.join(item, _)
                for _ in sorted(os.listdir(item))
                if os.path.isfile(os.path.join(item, _)) and getformat(_) is not None
            )
        elif getformat(item) is None:
            raise InputError(
                "Input must be a .usx, .usfm, or .sfm file, or a folder containing them."
            )
        else:
            files.append(item)

    if not files:
        raise InputError("No .usx, .usfm, or .sfm files found.")
    return files


def convertfile(
    fname: str, outdir: str | None = None, fencoding: str | None = None
) -> dict[str, Any]:
    """Convert a single file and return a summary of the results."""
    fmt = getformat(fname)
    csvname = outputpath(fname, outdir)
    result: dict[str, Any] = {"input": fname, "output": csvname, "format": fmt, "rows": 0}

    LOG.info("Processing (%s) %s", "USX" if fmt == "usx" else "USFM/SFM", fname)
    try:
        with open(fname, "rb") as ifile:
            data = ifile.read()
        rows = convertdata(fname, data, fencoding)
        with open(csvname, "w", encoding="utf_8", newline="") as ofile:
            writecsv(ofile, rows)
    except (StructuralParseError, InputError, OSError) as err:
        LOG.error("ERROR: %s", err)
        result["error"] = str(err)
        return result

    LOG.info("Created CSV: %s", csvname)
    result["rows"] = len(rows)
    return result


def processfiles(
    fnames: list[str],
    outdir: str | None,
    fencoding: str | None,
    dodebug: bool,
) -> list[dict[str, Any]]:
    """Convert files specified on command line."""
    if outdir:
        os.makedirs(outdir, exist_ok=True)

    LOG.info("Processing files...")
    func = partial(convertfile, outdir=outdir, fencoding=fencoding)
    if dodebug:
        return [func(_) for _ in fnames]
    with concurrent.futures.ProcessPoolExecutor() as executor:
        return list(executor.map(func, fnames))


# -------------------------------------------------------------------------- #


def encodingtype(value: str) -> str:
    """Argument type for encoding names."""
    try:
        return textencoding(value)
    except LookupError as err:
        raise ArgumentTypeError(f"unknown encoding: {value}") from err


def fail(message: str, jsonout: bool) -> None:
    """Report an error and exit."""
    if jsonout:
        print(json.dumps({"error": message}, indent=2))
    else:
        LOG.error(message)
    sysexit(1)


def main(argv: list[str] | None = None) -> None:
    """Command line interface."""
    parser = ArgumentParser(
        formatter_class=ArgumentDefaultsHelpFormatter,
        description="""
            convert USX, USFM, and SFM bibles to CSV.
        """,
        epilog=f"""
            * Version: {META["VERSION"]} * {META["DATE"]} * This script is public domain. *
        """,
    )
    parser.add_argument("-d", help="debug mode", action="store_true")
    parser.add_argument(
        "-e",
        help="set encoding to use for USFM files",
        default=None,
        metavar="encoding",
        type=encodingtype,
    )
    parser.add_argument("-o", help="specify output folder", metavar="output_folder")
    parser.add_argument(
        "-j", help="print a JSON summary to stdout", action="store_true"
    )
    parser.add_argument("-v", help="verbose output", action="store_true")
    parser.add_argument(
        "file",
        help="files or folders to process (wildcards and comma separated lists allowed)",
        nargs="+",
        metavar="filename",
    )
    args = parser.parse_args(argv)

    if args.v:
        LOG.setLevel(logging.INFO)
    if args.d:
        LOG.setLevel(logging.DEBUG)

    try:
        files = collectfiles(args.file)
        results = processfiles(files, args.o, args.e, args.d)
    except (InputError, OSError) as err:
        fail(str(err), args.j)
        return

    if args.j:
        print(json.dumps({"files": results}, indent=2))
    else:
        print("All conversions completed.")

    if any("error" in _ for _ in results):
        sysexit(1)


# -------------------------------------------------------------------------- #


if __name__ == "__main__":
    main()
