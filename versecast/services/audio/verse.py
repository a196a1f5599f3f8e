import re
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_BOOK = "Scripture"

# Precedence is list order: the first listed book contained anywhere in the
# name wins, regardless of where it occurs or whether a longer name also matches.
BOOKS: Tuple[str, ...] = (
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy", "Joshua",
    "Judges", "Ruth", "Samuel", "Kings", "Chronicles", "Ezra", "Nehemiah",
    "Esther", "Job", "Psalms", "Proverbs", "Ecclesiastes", "Song", "Isaiah",
    "Jeremiah", "Lamentations", "Ezekiel", "Daniel", "Hosea", "Joel", "Amos",
    "Obadiah", "Jonah", "Micah", "Nahum", "Habakkuk", "Zephaniah", "Haggai",
    "Zechariah", "Malachi",
    "Matthew", "Mark", "Luke", "John", "Acts", "Romans", "Corinthians",
    "Galatians", "Ephesians", "Philippians", "Colossians", "Thessalonians",
    "Timothy", "Titus", "Philemon", "Hebrews", "James", "Peter", "Jude",
    "Revelation",
)
_BOOK_TABLE = tuple((b.lower(), b) for b in BOOKS)

_UPLOAD_PREFIX_RE = re.compile(r"^\d+-")
_EXTENSION_RE = re.compile(r"\.[^.]+$")
_TRAILING_REF_RE = re.compile(r"(\d+)(?:[:_.](\d+))?\D*$")


@dataclass(frozen=True)
class VerseInfo:
    title: str
    book: str
    verse: str


def clean_filename(filename: str) -> str:
    return _EXTENSION_RE.sub("", _UPLOAD_PREFIX_RE.sub("", filename, count=1), count=1)


def match_book(text: str) -> Optional[str]:
    lowered = text.lower()
    for needle, book in _BOOK_TABLE:
        if needle in lowered:
            return book
    return None


def parse_reference(text: str) -> str:
    m = _TRAILING_REF_RE.search(text)
    if not m:
        return ""
    chapter, verse = m.groups()
    return f"{chapter}:{verse}" if verse else chapter


def extract_verse_info(filename: str) -> VerseInfo:
    cleaned = clean_filename(filename)
    book = match_book(cleaned)
    if book is None:
        return VerseInfo(title=cleaned, book=DEFAULT_BOOK, verse="")
    return VerseInfo(title=cleaned, book=book, verse=parse_reference(cleaned))
