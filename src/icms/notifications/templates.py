"""
Message templates for the notification endpoints.

Each message has an HTML email body and a plain-text body used for WhatsApp
and as the email text part. `render(name, **context)` returns a `Message`.
"""

from dataclasses import dataclass

from jinja2 import Environment, StrictUndefined

_LAYOUT_HEAD = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; background-color: #f4f4f4; margin: 0; padding: 0;">
<div style="max-width: 600px; margin: 0 auto; padding: 20px; background-color: #ffffff;">
"""

_LAYOUT_FOOT = """
<hr style="margin: 20px 0; border: none; border-top: 1px solid #ddd;">
<p style="font-size: 12px; color: #666;">This message was sent by the ICMS office.</p>
</div>
</body>
</html>
"""

ITINERARY_HTML = _LAYOUT_HEAD + """
<h1 style="color: #1e3a8a; font-size: 24px;">Your travel itinerary</h1>
<p>Dear {{ recipient_name }},</p>
<p>Your trip to <strong>{{ destination }}</strong> on <strong>{{ travel_date }}</strong> is set. Reference: {{ reference }}.</p>
{% if flights %}
<h2 style="font-size: 18px;">Flights</h2>
<ul>
{% for f in flights %}
    <li>{{ f.airline }} {{ f.flight_number }}: {{ f.departure_city }} to {{ f.arrival_city }}{% if f.departure_date %}, {{ f.departure_date }}{% endif %}{% if f.departure_time %} at {{ f.departure_time }}{% endif %}</li>
{% endfor %}
</ul>
{% endif %}
{% if hotels %}
<h2 style="font-size: 18px;">Hotels</h2>
<ul>
{% for h in hotels %}
    <li>{{ h.hotel_name }}{% if h.city %}, {{ h.city }}{% endif %}: {{ h.check_in or "TBD" }} to {{ h.check_out or "TBD" }}</li>
{% endfor %}
</ul>
{% endif %}
{% if cars %}
<h2 style="font-size: 18px;">Cars</h2>
<ul>
{% for c in cars %}
    <li>{{ c.car_type }}{% if c.pickup_location %} from {{ c.pickup_location }}{% endif %}: {{ c.pickup_date or "TBD" }} to {{ c.dropoff_date or "TBD" }}</li>
{% endfor %}
</ul>
{% endif %}
<p>Have a safe trip.</p>
""" + _LAYOUT_FOOT

ITINERARY_TEXT = """*Travel itinerary* ({{ reference }})

Dear {{ recipient_name }},
Your trip to {{ destination }} on {{ travel_date }} is set.
{% if flights %}
Flights:
{% for f in flights %}- {{ f.airline }} {{ f.flight_number }}: {{ f.departure_city }} to {{ f.arrival_city }} {{ f.departure_date }} {{ f.departure_time }}
{% endfor %}{% endif %}
{% if hotels %}
Hotels:
{% for h in hotels %}- {{ h.hotel_name }} {{ h.city }}: {{ h.check_in or "TBD" }} to {{ h.check_out or "TBD" }}
{% endfor %}{% endif %}
Have a safe trip."""

MEETING_REMINDER_HTML = _LAYOUT_HEAD + """
<h1 style="color: #1e3a8a; font-size: 24px;">Meeting reminder</h1>
<p>Dear {{ recipient_name }},</p>
<p>This is a reminder for <strong>{{ meeting_title }}</strong>.</p>
<table style="width: 100%; background-color: #f8f9fa; padding: 12px;">
    <tr><td><strong>Date</strong></td><td>{{ meeting_date }}</td></tr>
    <tr><td><strong>Time</strong></td><td>{{ meeting_time }}</td></tr>
    {% if location %}<tr><td><strong>Location</strong></td><td>{{ location }} ({{ location_type }})</td></tr>{% endif %}
    {% if meeting_link %}<tr><td><strong>Link</strong></td><td><a href="{{ meeting_link }}">{{ meeting_link }}</a></td></tr>{% endif %}
    {% if organizer %}<tr><td><strong>Organizer</strong></td><td>{{ organizer }}</td></tr>{% endif %}
</table>
{% if purpose %}<p>{{ purpose }}</p>{% endif %}
""" + _LAYOUT_FOOT

MEETING_REMINDER_TEXT = """*Meeting reminder*

Dear {{ recipient_name }},
{{ meeting_title }}
Date: {{ meeting_date }}
Time: {{ meeting_time }}
{% if location %}Location: {{ location }} ({{ location_type }})
{% endif %}{% if meeting_link %}Link: {{ meeting_link }}
{% endif %}{% if organizer %}Organizer: {{ organizer }}
{% endif %}"""

DAILY_TASKS_HTML = _LAYOUT_HEAD + """
<h1 style="color: #1e3a8a; font-size: 24px;">Tasks for {{ date }}</h1>
<p>Dear {{ recipient_name }}, you have {{ tasks|length }} open task{{ "s" if tasks|length != 1 else "" }}.</p>
<ol>
{% for t in tasks %}
    <li><strong>{{ t.title }}</strong> [{{ t.priority }}]{% if t.due_time %} due {{ t.due_time }}{% endif %}{% if t.description %}<br>{{ t.description }}{% endif %}</li>
{% endfor %}
</ol>
""" + _LAYOUT_FOOT

DAILY_TASKS_TEXT = """*Tasks for {{ date }}*

Dear {{ recipient_name }}, you have {{ tasks|length }} open task{{ "s" if tasks|length != 1 else "" }}:
{% for t in tasks %}{{ loop.index }}. {{ t.title }} [{{ t.priority }}]{% if t.due_time %} due {{ t.due_time }}{% endif %}
{% endfor %}"""

TASK_ASSIGNMENT_HTML = _LAYOUT_HEAD + """
<h1 style="color: #1e3a8a; font-size: 24px;">New task assigned</h1>
<p>Dear {{ recipient_name }},</p>
<p>{% if assigned_by %}{{ assigned_by }} has assigned you{% else %}You have been assigned{% endif %} a task.</p>
<div style="border-left: 4px solid {{ priority_color }}; padding: 12px; background-color: #f9fafb;">
    <p><strong>{{ task_title }}</strong></p>
    {% if task_description %}<p>{{ task_description }}</p>{% endif %}
    <p>Priority: {{ priority }}<br>Due: {{ due_date }}{% if due_time %} at {{ due_time }}{% endif %}</p>
</div>
""" + _LAYOUT_FOOT

TASK_ASSIGNMENT_TEXT = """*New task assigned*

Dear {{ recipient_name }},
{{ task_title }}
{% if task_description %}{{ task_description }}
{% endif %}Priority: {{ priority }}
Due: {{ due_date }}{% if due_time %} at {{ due_time }}{% endif %}
{% if assigned_by %}Assigned by: {{ assigned_by }}{% endif %}"""

PRIORITY_COLORS = {"URGENT": "#dc2626", "HIGH": "#ea580c", "MEDIUM": "#eab308", "LOW": "#22c55e"}

SUBJECTS = {
    "itinerary": "Travel itinerary: {destination} ({travel_date})",
    "meeting_reminder": "Reminder: {meeting_title} on {meeting_date}",
    "daily_tasks": "Your tasks for {date}",
    "task_assignment": "New task: {task_title}",
}

_TEMPLATES = {
    "itinerary": (ITINERARY_HTML, ITINERARY_TEXT),
    "meeting_reminder": (MEETING_REMINDER_HTML, MEETING_REMINDER_TEXT),
    "daily_tasks": (DAILY_TASKS_HTML, DAILY_TASKS_TEXT),
    "task_assignment": (TASK_ASSIGNMENT_HTML, TASK_ASSIGNMENT_TEXT),
}

_html_env = Environment(autoescape=True, undefined=StrictUndefined)
_text_env = Environment(autoescape=False, undefined=StrictUndefined, trim_blocks=True)


@dataclass(frozen=True)
class Message:
    subject: str
    html: str
    text: str


def render(name: str, **context) -> Message:
    """
    Raises:
        KeyError: unknown template name.
        jinja2.UndefinedError: the context is missing a variable the template uses.
    """
    html_source, text_source = _TEMPLATES[name]
    return Message(
        subject=SUBJECTS[name].format(**context),
        html=_html_env.from_string(html_source).render(**context),
        text=_text_env.from_string(text_source).render(**context).strip(),
    )
