import pytest

from versecast.services.audio.verse import BOOKS, VerseInfo, extract_verse_info


def test_upload_prefix_and_reference():
    info = extract_verse_info("12345-Psalms23_4.mp3")
    assert info == VerseInfo(title="Psalms23_4", book="Psalms", verse="23:4")


def test_unknown_book():
    info = extract_verse_info("randomtrack.mp3")
    assert info == VerseInfo(title="randomtrack", book="Scripture", verse="")


def test_colon_reference_and_case():
    info = extract_verse_info("1700000000-genesis 1:1.mp3")
    assert (info.title, info.book, info.verse) == ("genesis 1:1", "Genesis", "1:1")


def test_reference_is_trailing_number():
    assert extract_verse_info("John3_16.mp3").verse == "3:16"
    assert extract_verse_info("Romans 8.mp3").verse == "8"
    assert extract_verse_info("Hebrews.mp3").verse == ""


def test_list_order_beats_leftmost_position():
    assert extract_verse_info("Revelation_Genesis1_1.mp3").book == "Genesis"


def test_list_order_beats_longer_match():
    assert extract_verse_info("Job_Lamentations3.mp3").book == "Job"
    # "Song" precedes "John" in the table
    assert extract_verse_info("SongOfJohn.mp3").book == "Song"


def test_book_table_is_ordered_and_unique():
    assert BOOKS[0] == "Genesis" and BOOKS[-1] == "Revelation"
    assert len(set(BOOKS)) == len(BOOKS)


@pytest.mark.parametrize("name", ["", ".", "---", "123-", "12-.mp3", "a.b.c", "éè", "9" * 200])
def test_total_on_odd_input(name):
    info = extract_verse_info(name)
    assert isinstance(info.title, str)
    assert info.book == "Scripture" or info.book in BOOKS
    assert extract_verse_info(name) == info
