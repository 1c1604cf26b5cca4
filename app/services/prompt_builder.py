"""Summary prompt construction."""

SUMMARY_LANGUAGE = "Arabic"

LENGTH_RATIO = "25-30%"

COVERAGE_ASPECTS = (
    "Central thesis/argument",
    "Chapter-by-chapter analysis",
    "Key concepts and definitions",
    "Methodology",
    "Evidence used",
    "Conclusions",
    "Scholarly contribution",
)


def build_prompt(text: str) -> str:
    """Build the academic summary prompt for a document.

    The source text is appended verbatim after the fixed instructions.
    """
    aspects = "\n".join(
        f"{number}. {aspect}" for number, aspect in enumerate(COVERAGE_ASPECTS, start=1)
    )
    return (
        f"Generate an exhaustive, detailed academic summary in {SUMMARY_LANGUAGE} "
        f"of the following content.\n\n"
        f"The summary should be extremely detailed ({LENGTH_RATIO} of original length), "
        f"covering:\n"
        f"{aspects}\n\n"
        f"Content:\n"
        f"{text}"
    )
