"""Notification Content — HTML bodies for the admin and applicant emails.

Invariants:
    - Pure: builds strings from the submitted form data, no IO
    - Every user-supplied value is HTML-escaped before interpolation
    - Education levels are rendered in the table, never in the generic field list
    - Rendering is total over JSON input: unexpected shapes render as text or
      "Not provided", never raise
"""

from dataclasses import dataclass
from html import escape

ADMIN_SUBJECT = "New Job Application Received"
CONFIRMATION_SUBJECT = "Application Received - Next Steps"
PDF_ATTACHMENT_NAME = "AGORA_Applicant_Data.pdf"

EDUCATION_KEYS = ("tenth", "twelfth", "graduation")
NOT_PROVIDED = "Not provided"

CENTER_LABELS = {
    "delhi-ncr": "Delhi-NCR",
    "bhubaneswar": "Bhubaneswar",
    "ahmedabad": "Ahmedabad",
    "kolkata": "Kolkata",
    "haryana": "Haryana",
}


@dataclass(frozen=True)
class EducationRequirements:
    twelfth: bool = True
    graduation: bool = True


_POST_REQUIREMENTS = {
    "Assistant Branch Manager": EducationRequirements(True, True),
    "Relationship Manager": EducationRequirements(True, True),
    "Multi Tasking Staff": EducationRequirements(False, False),
    "Block Supervisor": EducationRequirements(True, False),
}


@dataclass(frozen=True)
class Signature:
    company_name: str
    name: str
    title: str


def requirements_for(post: str | None) -> EducationRequirements:
    return _POST_REQUIREMENTS.get(post or "", EducationRequirements())


def center_label(value: object) -> str:
    """Display label for a center code; lists render as comma-separated labels."""
    if isinstance(value, (list, tuple)):
        return ", ".join(center_label(v) for v in value)
    if not isinstance(value, str):
        return str(value)
    return CENTER_LABELS.get(value, value)


def _e(value: object) -> str:
    return escape(str(value))


def render_fields(data: dict) -> str:
    """Nested <ul> of all non-education fields."""
    items = []
    for key, value in data.items():
        if key in EDUCATION_KEYS:
            continue
        if isinstance(value, dict):
            items.append(f"<li><b>{_e(key)}:</b> {render_fields(value)}</li>")
        else:
            items.append(f"<li><b>{_e(key)}:</b> {_e(value)}</li>")
    return "<ul>" + "".join(items) + "</ul>"


def _cell(level: object, key: str) -> str:
    # Anything but a mapping (e.g. "N/A") carries no per-column values
    value = level.get(key) if isinstance(level, dict) else None
    return _e(value) if value else NOT_PROVIDED


def _status_cell(required: bool) -> str:
    color = "#dc3545" if required else "#28a745"
    label = "Required" if required else "Optional"
    return f'<td style="padding: 8px; color: {color};">{label}</td>'


def render_education_table(form_data: dict) -> str:
    """Education table annotated with the selected post's requirements."""
    post = form_data.get("post")
    req = requirements_for(post)
    tenth = form_data.get("tenth")
    twelfth = form_data.get("twelfth")
    graduation = form_data.get("graduation")
    # (label, level data, institution key, board key, stream key, score key, required)
    rows = [
        ("10th", tenth, "school", "board", None, "percentage", True),
        ("12th/Diploma", twelfth, "school", "board", "stream", "percentage", req.twelfth),
        ("Graduation", graduation, "college", "university", "major", "cgpa", req.graduation),
    ]
    header = "".join(
        f'<th style="padding: 8px;">{h}</th>'
        for h in ("Level", "School/College", "Board/University",
                  "Stream/Major", "Year", "Percentage/CGPA", "Status")
    )
    body = []
    for label, level, inst, board, stream, score, required in rows:
        cells = [
            label,
            _cell(level, inst),
            _cell(level, board),
            _cell(level, stream) if stream else "-",
            _cell(level, "year"),
            _cell(level, score),
        ]
        body.append(
            "<tr>"
            + "".join(f'<td style="padding: 8px;">{c}</td>' for c in cells)
            + _status_cell(required)
            + "</tr>"
        )
    summary = (
        f"<strong>Education Requirements for {_e(post or '')}:</strong> "
        f"10th: Required | "
        f"12th/Diploma: {'Required' if req.twelfth else 'Optional'} | "
        f"Graduation: {'Required' if req.graduation else 'Optional'}"
    )
    return (
        '<div style="margin-bottom: 20px;">'
        f'<p style="color: #666; font-size: 14px;">{summary}</p>'
        '<table border="1" cellpadding="4" cellspacing="0" '
        'style="border-collapse:collapse; width: 100%;">'
        f'<tr style="background-color: #f8f9fa;">{header}</tr>'
        + "".join(body)
        + "</table></div>"
    )


def render_admin_email(form_data: dict, files: dict) -> str:
    """Full admin notification for one application."""
    parts = ["<h2>New Job Application Received</h2>", "<h3>Application Details:</h3><ul>"]
    for key, label in (
        ("applicationNumber", "Application Number"),
        ("post", "Post"),
        ("category", "Category"),
    ):
        if form_data.get(key):
            parts.append(f"<li><b>{label}:</b> {_e(form_data[key])}</li>")
    parts.append("</ul>")

    parts.append("<h3>Form Data:</h3>")
    parts.append(render_fields(form_data))

    choices = [
        (files.get("centerChoice1"), "First Choice (Priority 1)"),
        (files.get("centerChoice2"), "Second Choice (Priority 2)"),
    ]
    if any(value for value, _ in choices):
        parts.append("<h3>Center Preferences:</h3><ul>")
        for value, label in choices:
            if value:
                parts.append(f"<li><b>{label}:</b> {_e(center_label(value))}</li>")
        parts.append("</ul>")

    parts.append("<h3>Education Details:</h3>")
    parts.append(render_education_table(form_data))

    uploads = [
        f'<p><b>{_e(key)}:</b><br><a href="{_e(url)}" target="_blank">{_e(url)}</a>'
        f'<br><img src="{_e(url)}" width="200"/></p>'
        for key, url in files.items()
        if key != "center" and isinstance(url, str) and url.startswith("http")
    ]
    if uploads:
        parts.append("<h3>Uploaded Files:</h3>" + "".join(uploads))
    return "".join(parts)


def render_confirmation_email(form_data: dict, signature: Signature) -> str:
    """Acknowledgement sent to the applicant."""
    name = _e(form_data.get("fullName") or "Applicant")
    post = _e(form_data.get("post") or "[Job Position]")
    company = _e(signature.company_name)
    return (
        f"<p>Dear {name},</p>"
        f"<p>Thank you for your interest in joining {company}. We appreciate the "
        f"time and effort you took to apply for the {post} position.</p>"
        "<p>We have received your application and will review it carefully. "
        "Our recruitment team will be in touch with you shortly about the next steps.</p>"
        f"<p><b>Application Number:</b> {_e(form_data.get('applicationNumber') or '')}</p>"
        f"<p><b>Post:</b> {_e(form_data.get('post') or '')}</p>"
        f"<p><b>Category:</b> {_e(form_data.get('category') or '')}</p>"
        "<p>In the coming days we will send you an admit card and more details "
        "about the examination process. Please keep an eye on your inbox.</p>"
        "<br><p>Best regards,</p>"
        f"<p><b>{_e(signature.name)}</b><br/>{_e(signature.title)}<br/>{company}</p>"
    )
