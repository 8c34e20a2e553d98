# app/services/share.py
from __future__ import annotations

import base64
import io

import qrcode  # type: ignore
from jinja2 import Environment, BaseLoader, select_autoescape

from app.core.config import settings
from app.schemas.portfolio import PortfolioOut

PRINT_TEMPLATE = """
<!doctype html>
<html>
  <head>
    <meta charset="utf-8">
    <title>Portfolio - {{ profile.full_name or 'Student' }}</title>
    <style>
      body { font-family: system-ui, -apple-system, sans-serif; margin: 0; padding: 20px; }
      .container { max-width: 800px; margin: 0 auto; }
      .card { border: 1px solid #e5e7eb; border-radius: 8px; padding: 16px; margin-bottom: 16px; }
      .hero { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; text-align: center; padding: 32px; }
      .badge { display: inline-block; padding: 4px 8px; border-radius: 4px; font-size: 12px; margin: 2px; }
      .verified { background: #dcfce7; color: #166534; }
      .pending { background: #fef9c3; color: #854d0e; }
      .status { background: #f3f4f6; color: #374151; }
      @media print { body { margin: 0; } }
    </style>
  </head>
  <body>
    <div class="container">
      <div class="hero">
        <h1>{{ profile.full_name or 'Student' }}</h1>
        {% if profile.university %}<p>{{ profile.degree or '' }} {{ profile.university }}{% if profile.graduation_year %} ({{ profile.graduation_year }}){% endif %}</p>{% endif %}
        {% if profile.bio %}<p>{{ profile.bio }}</p>{% endif %}
      </div>
      <div class="card">
        <b>{{ stats.total_projects }}</b> projects &middot;
        <b>{{ stats.completed_projects }}</b> completed &middot;
        <b>{{ stats.total_certificates }}</b> certificates &middot;
        <b>{{ stats.total_study_hours }}</b> study hours
      </div>
      <h2>Certificates</h2>
      {% for c in certificates %}
      <div class="card">
        <h3>{{ c.title }}</h3>
        <p>{{ c.issuer }}{% if c.issue_date %} &middot; {{ c.issue_date }}{% endif %}</p>
        <span class="badge status">{{ c.category.value }}</span>
        {% if c.pending %}<span class="badge pending">Pending</span>{% else %}<span class="badge verified">Verified</span>{% endif %}
        {% if c.description %}<p>{{ c.description }}</p>{% endif %}
      </div>
      {% else %}
      <p>No certificates yet.</p>
      {% endfor %}
      <h2>Projects</h2>
      {% for p in portfolios %}
      <div class="card">
        <h3>{{ p.title }}</h3>
        <span class="badge status">{{ p.status.value }}</span>
        {% if p.pending %}<span class="badge pending">Pending</span>{% else %}<span class="badge verified">Verified</span>{% endif %}
        {% if p.description %}<p>{{ p.description }}</p>{% endif %}
        {% for t in p.technologies %}<span class="badge status">{{ t }}</span>{% endfor %}
      </div>
      {% else %}
      <p>No projects yet.</p>
      {% endfor %}
      {% if share_url %}
      <div style="text-align:center; font-size: 12px">
        <img src="{{ qr_data_uri }}" style="height:120px"><br>{{ share_url }}
      </div>
      {% endif %}
    </div>
  </body>
</html>
""".strip()

def share_url(base_url: str, user_id: str) -> str:
    # prioridade: env PUBLIC_BASE_URL; senão, o host da requisição
    base = (settings.PUBLIC_BASE_URL or base_url).rstrip("/")
    return f"{base}/portfolio/{user_id}"

def qr_png(text: str) -> bytes:
    img = qrcode.make(text)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()

def _qr_data_uri(text: str) -> str:
    b64 = base64.b64encode(qr_png(text)).decode("ascii")
    return f"data:image/png;base64,{b64}"

def _render_html(template: str, ctx: dict) -> str:
    env = Environment(
        loader=BaseLoader(),
        autoescape=select_autoescape(["html", "xml"], default_for_string=True),
        enable_async=False,
    )
    return env.from_string(template).render(**ctx)

def render_printable(snapshot: PortfolioOut, link: str | None = None) -> str:
    return _render_html(
        PRINT_TEMPLATE,
        dict(
            profile=snapshot.user_profile,
            stats=snapshot.stats,
            certificates=snapshot.certificates,
            portfolios=snapshot.portfolios,
            share_url=link,
            qr_data_uri=_qr_data_uri(link) if link else None,
        ),
    )
