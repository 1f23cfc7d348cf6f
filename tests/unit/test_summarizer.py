from linkup.services.summarizer import generate_summary


def test_short_text_is_returned_unchanged():
    text = "A short note. Nothing more!"
    assert generate_summary(text) == text


def test_empty_text():
    assert generate_summary("") == ""
    assert generate_summary(None) == ""


def test_takes_leading_sentences_that_fit():
    text = "First sentence is here. Second sentence follows. " + "x" * 200
    assert generate_summary(text) == "First sentence is here. Second sentence follows."


def test_falls_back_to_truncation_when_first_sentence_is_too_long():
    text = "y" * 300
    assert generate_summary(text) == "y" * 150 + "..."


def test_summary_stays_within_limit():
    text = " ".join(f"Sentence number {i} has a few words." for i in range(40))
    summary = generate_summary(text)
    assert 0 < len(summary) <= 150
    assert summary.startswith("Sentence number 0 has a few words.")


def test_custom_max_length():
    text = "Alpha beta. Gamma delta. Epsilon zeta."
    assert generate_summary(text, max_length=20) == "Alpha beta."
