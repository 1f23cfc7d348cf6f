from linkup.models.analysis import AnalysisResult, ExtractedContent, utcnow
from linkup.services.classifiers import (
    DEFAULT_COMPLEXITY,
    PageHints,
    analyze_sentiment,
    calculate_complexity,
    calculate_read_time,
    determine_content_type,
)
from linkup.services.lexical import count_words, extract_keywords
from linkup.services.summarizer import generate_summary

UNAVAILABLE_SUMMARY = "Unable to analyze content"


def degraded_analysis() -> AnalysisResult:
    """The result recorded for a page that could not be fetched."""
    return AnalysisResult(
        keywords=[],
        read_time_minutes=1,
        complexity_score=DEFAULT_COMPLEXITY,
        content_type="unknown",
        summary=UNAVAILABLE_SUMMARY,
        sentiment="neutral",
        word_count=0,
        analysis_status="failed",
        last_analyzed_at=utcnow(),
    )


def generate_insights(extracted: ExtractedContent) -> AnalysisResult:
    if extracted.fetch_error is not None:
        return degraded_analysis()

    text = extracted.main_text
    word_count = count_words(text)
    hints = PageHints(has_video=extracted.has_video, image_count=extracted.image_count)

    return AnalysisResult(
        keywords=extract_keywords(text),
        read_time_minutes=calculate_read_time(word_count),
        complexity_score=calculate_complexity(text),
        content_type=determine_content_type(text, extracted.title, hints),
        summary=generate_summary(text),
        sentiment=analyze_sentiment(text),
        word_count=word_count,
        analysis_status="completed",
        last_analyzed_at=utcnow(),
        extracted_title=extracted.title,
        extracted_description=extracted.description,
        extracted_image=extracted.hero_image_url,
        headings=list(extracted.headings),
    )
