from linkup.services.lexical import split_sentences

SUMMARY_MAX_LENGTH = 150


def generate_summary(text: str | None, max_length: int = SUMMARY_MAX_LENGTH) -> str:
    """
    Extractive summary: leading sentences that fit under max_length.
    Falls back to a hard cut plus "..." when not even the first sentence fits.
    """
    if not text or len(text) < max_length:
        return text or ""

    summary = ""
    for sentence in split_sentences(text):
        sentence = sentence.strip()
        if len(summary + sentence) >= max_length:
            break
        summary += sentence + ". "

    return summary.strip() or text[:max_length] + "..."
