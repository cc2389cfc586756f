# event_registration/services/email_renderer.py
"""
`{{variable}}` substitution for email templates.

Values are inserted without HTML escaping; template authors are trusted.

Body and subject only replace placeholders whose key is present in the
variables, so `{{unknown}}` stays in the text. Header and footer replace
every `{{word}}` placeholder and blank out unknown or empty ones.
"""
import re
from typing import Mapping, Optional

PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")

EMAIL_DOCUMENT = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 0; }}
    .email-container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .email-header {{ margin-bottom: 20px; }}
    .email-body {{ margin-bottom: 20px; }}
    .email-footer {{ margin-top: 20px; padding-top: 20px; border-top: 1px solid #eee; font-size: 12px; color: #666; }}
  </style>
</head>
<body>
  <div class="email-container">
{sections}
  </div>
</body>
</html>"""


def substitute_variables(text: str, variables: Mapping[str, object]) -> str:
    result = text or ""
    for key, value in variables.items():
        result = result.replace("{{" + key + "}}", "" if value is None else str(value))
    return result


def _substitute_or_blank(text: str, variables: Mapping[str, object]) -> str:
    def replace(match: re.Match) -> str:
        value = variables.get(match.group(1))
        return str(value) if value else ""

    return PLACEHOLDER_RE.sub(replace, text)


def render_email_template(
    body_html: str,
    header_html: Optional[str],
    footer_html: Optional[str],
    variables: Mapping[str, object],
) -> str:
    """Renders a full HTML email document."""
    header = _substitute_or_blank(header_html or "", variables)
    body = substitute_variables(body_html, variables)
    footer = _substitute_or_blank(footer_html or "", variables)

    sections = []
    if header:
        sections.append(f'    <div class="email-header">{header}</div>')
    sections.append(f'    <div class="email-body">{body}</div>')
    if footer:
        sections.append(f'    <div class="email-footer">{footer}</div>')
    return EMAIL_DOCUMENT.format(sections="\n".join(sections))


def render_subject(subject: str, variables: Mapping[str, object]) -> str:
    return substitute_variables(subject, variables)
