from catalog import Item
from utils import explanation_text, format_predicted_rating, format_stars, score_percent, type_label


def test_score_percent():
    assert score_percent(0.5) == 50
    assert score_percent(0.756) == 76
    assert score_percent(0.504) == 50
    assert score_percent(0.0) == 0
    assert score_percent(1.0) == 100


def test_explanation_text():
    assert explanation_text(("sci-fi", "action")) == "Matches your interest in: sci-fi, action"
    assert explanation_text(()) == "Based on your overall preferences"


def test_rating_labels():
    assert format_predicted_rating(4.26) == "4.3 ★"
    assert format_predicted_rating(3.0) == "3.0 ★"
    assert format_stars(0) == "No rating"
    assert format_stars(4) == "4 ★"


def test_type_label():
    book = Item(id=1, title="t", type="book", description="", tags=("x",))
    assert type_label(book) == "📚 Book"
