from __future__ import annotations

import os
from typing import Sequence

from flask import Flask, Response, flash, redirect, render_template_string, request

from listen_rank.cli import DEFAULT_CUTOFF, compute_rankings
from listen_rank.core.parser import MalformedLineError
from listen_rank.core.ranking import RankedEntry
from listen_rank.core.report import format_ranked_entry, index_width


FORM_HTML = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Listen Rank</title>
    <style>
      body { font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; margin: 24px; max-width: 920px; }
      h1 { margin: 0 0 8px; }
      .hint { color: #333; margin: 0 0 16px; }
      label { display: block; font-weight: 600; margin: 12px 0 6px; }
      input[type="number"], textarea { width: 100%; padding: 10px; border: 1px solid #111; border-radius: 6px; }
      textarea { min-height: 260px; font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, monospace; }
      .row { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; }
      .btn { margin-top: 14px; padding: 10px 14px; border: 2px solid #111; border-radius: 10px; background: #fff; font-weight: 700; cursor: pointer; }
      .box { border: 2px solid #111; border-radius: 12px; padding: 14px; }
      .flash { margin: 10px 0; padding: 10px 12px; border: 1px solid #111; border-radius: 8px; }
      .small { font-size: 12px; color: #333; }
    </style>
  </head>
  <body>
    <h1>Listen Rank</h1>
    <p class="hint">Paste/upload a listening log (<code>→ date</code> lines followed by <code>Artist – Album</code> lines) to rank your top albums and artists.</p>

    {% with messages = get_flashed_messages() %}
      {% if messages %}
        {% for msg in messages %}
          <div class="flash">{{ msg }}</div>
        {% endfor %}
      {% endif %}
    {% endwith %}

    <form class="box" method="post" action="/report" enctype="multipart/form-data">
      <div class="row">
        <div>
          <label>Entries shown before "show more"</label>
          <input type="number" name="cutoff" value="{{ default_cutoff }}" min="0" step="1" required>
        </div>
        <div>
          <label>Log file (optional)</label>
          <input type="file" name="file" accept=".txt,text/plain">
          <div class="small">If provided, this overrides the pasted text.</div>
        </div>
      </div>

      <label>Listening log (plain text)</label>
      <textarea name="log" placeholder="→ 2024-01-01&#10;Artist A – Album X (2x)"></textarea>

      <button class="btn" type="submit">Rank</button>
    </form>
  </body>
</html>
"""

REPORT_HTML = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>Listen Rank - Report</title>
    <style>
      body { font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, monospace; margin: 24px; max-width: 920px; }
      ol { list-style: none; padding: 0; }
      summary { cursor: pointer; font-weight: 700; }
    </style>
  </head>
  <body>
    <p><a href="/">&larr; Rank another log</a></p>
    {% for section in sections %}
      <h2>{{ section.title }}</h2>
      <ol>
        {% for line in section.head %}<li>{{ line }}</li>{% endfor %}
      </ol>
      <p>{{ section.summary }}</p>
      {% if section.rest %}
        <details>
          <summary>Show {{ section.rest|length }} more</summary>
          <ol>
            {% for line in section.rest %}<li>{{ line }}</li>{% endfor %}
          </ol>
        </details>
      {% endif %}
    {% endfor %}
  </body>
</html>
"""


app = Flask(__name__)
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")


def _section(title: str, ranked: Sequence[RankedEntry[str]], cutoff: int, noun: str) -> dict:
    width = index_width(len(ranked))
    lines = [format_ranked_entry(entry, width) for entry in ranked]
    total = sum(entry.freq for entry in ranked)
    return {
        "title": title,
        "head": lines[:cutoff],
        "rest": lines[cutoff:],
        "summary": f"{len(ranked)} unique {noun}, {total} in total.",
    }


@app.get("/")
def index() -> str:
    return render_template_string(FORM_HTML, default_cutoff=DEFAULT_CUTOFF)


@app.post("/report")
def report() -> Response | str:
    cutoff_raw = (request.form.get("cutoff") or str(DEFAULT_CUTOFF)).strip()
    try:
        cutoff = int(cutoff_raw)
    except ValueError:
        flash("Entries shown must be a whole number.")
        return redirect("/")
    if cutoff < 0:
        flash("Entries shown must be 0 or more.")
        return redirect("/")

    text = request.form.get("log") or ""
    uploaded = request.files.get("file")
    if uploaded and uploaded.filename:
        try:
            text = uploaded.read().decode("utf-8")
        except UnicodeDecodeError:
            flash("Unable to read uploaded file as UTF-8 text.")
            return redirect("/")

    if not text.strip():
        flash("Provide a listening log (paste text or upload a .txt file).")
        return redirect("/")

    try:
        rankings = compute_rankings(text.split("\n"))
    except MalformedLineError as e:
        flash(str(e))
        return redirect("/")

    sections = [
        _section("Top albums", rankings.albums, cutoff, "albums"),
        _section("Top artists", rankings.artists, cutoff, "artists"),
    ]
    return render_template_string(REPORT_HTML, sections=sections)


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=5000, debug=True)
