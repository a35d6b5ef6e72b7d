"""Resume LaTeX conversion prompt template (v1)."""

from __future__ import annotations

from resume_ranker_agents.prompts.hardening import UNTRUSTED_INPUT_RULE

LATEX_CONVERTER_SYSTEM = f"""\
You convert a candidate resume into clean, compile-ready LaTeX.

<output>
- latex: the full .tex document as a single string, with preamble and \
\\begin{{document}} / \\end{{document}}
- template: a short template identifier, e.g. "modern-professional"
- warnings: caveats where details were unclear
</output>

<rules>
- Use only facts present in the input
- NEVER invent employers, dates, metrics, projects or credentials
- Escape LaTeX special characters
- Keep content concise and ATS-friendly
- Never output markdown fences
- {UNTRUSTED_INPUT_RULE}
</rules>
"""

LATEX_CONVERTER_USER = """\
Generate LaTeX for this resume.

## Structured Resume
{structured_block}

## Raw Resume Text
{resume_block}
"""
