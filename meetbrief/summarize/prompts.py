"""Prompt templates for meeting summarization."""

SECTION_OUTLINE = [
    "Meeting Details",
    "Executive Summary",
    "Technical Architecture (if applicable)",
    "Decisions Made",
    "Role Assignments",
    "Action Items",
    "Next Meeting",
]

PLAIN_TEXT_RULES = """Do NOT use markdown formatting (no ##, no **, no __, no *, no ||, no pipes |, no ---). \
Write section headings as normal words. Use simple numbered lists (1., 2., 3.) or dashes (-) for lists. \
For structured data, use aligned plain text columns instead of markdown tables."""

SUMMARY_SYSTEM = """You are a professional meeting summarizer.

Your task is to produce a detailed, well-structured meeting summary in plain text format.

STRICT RULES:
- Do NOT use markdown formatting (no ##, no **, no __, no *, no ||, no pipes |, no ---).
- Do NOT use emojis or decorative symbols.
- Only use plain text headings and spacing.
- Headings should be written as normal words (for example: Meeting Details, Executive Summary, \
Technical Architecture, Decisions Made, Role Assignments, Action Items, Next Meeting).
- Lists should use numbers (1., 2., 3.) or simple dashes (-).
- For tabular or structured data, write it in aligned plain text columns, not Markdown tables.

CONTENT REQUIREMENTS:
- Always include: Meeting Details, Executive Summary, Technical Architecture (if discussed), \
Decisions Made, Role Assignments, Action Items, and Next Meeting.
- Preserve as much information as possible, do not shorten too much.
- Expand into full sentences where helpful to improve readability.
- Keep the summary clear, professional, and suitable for project documentation."""

CHUNK_SYSTEM = """You are a professional meeting summarizer. \
Summarize this portion of the meeting transcript using plain text only. \
Do NOT use markdown formatting (no ##, no **, no __, no *, no ||, no pipes |, no ---). \
Use normal text headings and simple lists with numbers or dashes. Keep it professional and clear."""

DEFAULT_SUMMARY_PROMPT = SUMMARY_SYSTEM

CHUNK_PROMPT = """This is part {part} of {total} of a meeting transcript.

{instructions}

Since this is only a portion of the full transcript, focus on summarizing the content in this part \
while noting any discussions that seem incomplete and may continue in other parts.

Transcript part:
{transcript}"""

WHOLE_PROMPT = """{instructions}

Meeting Transcript:
{transcript}"""

REDUCE_PROMPT = """Please create a comprehensive, unified professional meeting summary \
from these individual part summaries:

{chunk_summaries}

Consolidate into a single, coherent summary with these sections:
{outline}

IMPORTANT: Use plain text format only. {rules}

Remove redundancy and create a flowing, comprehensive summary."""


def build_prompt(
    transcript: str,
    custom_prompt: str | None = None,
    is_chunk: bool = False,
    chunk_index: int = 0,
    total_chunks: int = 1,
) -> str:
    """
    Build the user message for one summarization call.

    When summarizing one of several chunks, the message says which part it is
    and that discussions may be cut off at the edges.
    """
    instructions = custom_prompt or DEFAULT_SUMMARY_PROMPT

    if is_chunk and total_chunks > 1:
        return CHUNK_PROMPT.format(
            part=chunk_index + 1,
            total=total_chunks,
            instructions=instructions,
            transcript=transcript,
        )

    return WHOLE_PROMPT.format(instructions=instructions, transcript=transcript)


def build_reduce_prompt(chunk_summaries: str) -> str:
    """Build the message asking for one document from the per-chunk summaries."""
    return REDUCE_PROMPT.format(
        chunk_summaries=chunk_summaries,
        outline="\n".join(SECTION_OUTLINE),
        rules=PLAIN_TEXT_RULES,
    )
