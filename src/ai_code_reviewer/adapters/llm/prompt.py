"""Review prompt construction.

All three backends receive the same prompt text: the instruction lines for
the enabled categories, a fixed response-format contract, and the source
text appended verbatim as the last section. No truncation happens here;
the host enforces the file size limit before a review starts.
"""

from ...models.review import Category, ReviewRequest

CATEGORY_INSTRUCTIONS: dict[Category, str] = {
    Category.BUG: (
        "- BUG: null pointer risks, unclosed resources, logic errors, wrong equals/hashCode"
    ),
    Category.SPELL_CHECK: "- SPELL_CHECK: typos in method/variable/class names and comments",
    Category.NAMING: (
        "- NAMING: meaningless names (x, temp, data, obj), misleading names, poor "
        "abbreviations - suggest context-aware better names"
    ),
    Category.READABILITY: (
        "- READABILITY: methods over 20 lines, nesting over 3 levels, magic numbers, "
        "complex conditions, long parameter lists"
    ),
    Category.JAVADOC: (
        "- JAVADOC: missing Javadoc on public methods/classes, incomplete @param/@return tags"
    ),
}

PROMPT_INTRO = (
    "You are an expert Java code reviewer. Review the Java source code below and "
    "return a JSON array of issues found."
)

SEVERITY_GUIDE = """SEVERITY LEVELS:
- CRITICAL: bugs, logic errors that could cause failures
- WARNING: spell check issues, bad naming, missing Javadoc
- SUGGESTION: readability improvements, style suggestions"""

RESPONSE_FORMAT = """RESPONSE FORMAT - return ONLY a JSON array, no markdown fences, no explanation:
[
  {
    "line": <1-based line number>,
    "severity": "CRITICAL" | "WARNING" | "SUGGESTION",
    "category": "BUG" | "SPELL_CHECK" | "NAMING" | "READABILITY" | "JAVADOC",
    "title": "<short one-line summary>",
    "description": "<clear explanation of the problem>",
    "suggestion": "<specific actionable fix advice>",
    "fixedCode": "<optional: the corrected line or snippet, empty string if not applicable>"
  }
]"""

RULES = """RULES:
1. Line numbers must be accurate - count carefully
2. Be specific - reference the actual variable/method name in title
3. For NAMING issues, always suggest a specific better name based on context
4. For SPELL_CHECK, show: wrong -> correct
5. Return empty array [] if no issues found
6. Return ONLY valid JSON - no explanation text outside the array"""

SOURCE_HEADER = "JAVA SOURCE TO REVIEW:"


def category_instructions(categories: frozenset[Category]) -> list[str]:
    """Instruction lines for ``categories`` in fixed category order."""
    return [CATEGORY_INSTRUCTIONS[c] for c in Category if c in categories]


def build_prompt(request: ReviewRequest) -> str:
    """Build the single text prompt sent to every backend."""
    instructions = "\n".join(category_instructions(request.enabled_categories))
    sections = [
        PROMPT_INTRO,
        f"REVIEW CATEGORIES TO CHECK:\n{instructions}",
        SEVERITY_GUIDE,
        RESPONSE_FORMAT,
        RULES,
    ]
    return "\n\n".join(sections) + f"\n\n{SOURCE_HEADER}\n{request.source_text}"
