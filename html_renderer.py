# html_renderer.py
from __future__ import annotations
from typing import Optional
import html

from lib.tracklist import TracklistSession, known_header


_STYLE = """
    body {
      background: #121212;
      color: #e0e0e0;
      font-family: ui-monospace, SFMono-Regular, Menlo, monospace;
      padding: 32px;
    }
    h1 { text-align: center; letter-spacing: 0.1em; }
    .dropzone {
      border: 2px dashed #4b5563;
      border-radius: 8px;
      padding: 32px;
      text-align: center;
      margin-bottom: 32px;
    }
    .dropzone.active { border-color: #9ca3af; background: #1f2937; }
    .notice { color: #fbbf24; margin: 12px 0; }
    table { border-collapse: collapse; width: 100%; }
    th, td {
      border-bottom: 1px solid #1f2937;
      padding: 8px 12px;
      font-size: 12px;
      text-align: left;
      white-space: nowrap;
    }
    th { background: #1a1a1a; text-transform: uppercase; }
    th.used { color: #93c5fd; }
    textarea {
      width: 100%;
      min-height: 240px;
      background: #1a1a1a;
      color: #e0e0e0;
      border: 1px solid #374151;
    }
    button, a.button {
      background: #374151;
      color: #e0e0e0;
      border: none;
      padding: 6px 12px;
      margin-right: 8px;
      cursor: pointer;
      text-decoration: none;
    }
    .scroll { overflow-x: auto; }
"""

_UPLOAD_SCRIPT = """
  <script>
    const zone = document.getElementById('dropzone');
    const form = document.getElementById('upload-form');
    const input = document.getElementById('file-input');
    ['dragenter', 'dragover'].forEach(t => zone.addEventListener(t, e => {
      e.preventDefault(); zone.classList.add('active');
    }));
    ['dragleave', 'drop'].forEach(t => zone.addEventListener(t, e => {
      e.preventDefault(); zone.classList.remove('active');
    }));
    zone.addEventListener('drop', e => {
      if (e.dataTransfer.files && e.dataTransfer.files[0]) {
        input.files = e.dataTransfer.files;
        form.submit();
      }
    });
    input.addEventListener('change', () => form.submit());
  </script>
"""

_COPY_SCRIPT = """
  <script>
    document.getElementById('copy-button').addEventListener('click', async () => {
      const text = document.getElementById('tracklist').value;
      const notice = document.getElementById('copy-notice');
      try {
        await navigator.clipboard.writeText(text);
        notice.textContent = 'Copied to clipboard.';
      } catch (err) {
        notice.textContent = 'Could not copy to clipboard. Select the text and copy it manually.';
      }
    });
  </script>
"""


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>{html.escape(title)}</title>
  <style>{_STYLE}</style>
</head>
<body>
{body}
</body>
</html>
"""


def _notice_html(notice: Optional[str]) -> str:
    if not notice:
        return ""
    return f'<p class="notice">{html.escape(notice)}</p>'


def _upload_form() -> str:
    return """
  <form id="upload-form" action="/upload" method="post" enctype="multipart/form-data">
    <div id="dropzone" class="dropzone">
      <label>
        <span>DROP .TXT FILE HERE OR CLICK TO SELECT</span>
        <input id="file-input" type="file" name="file" accept=".txt" hidden />
      </label>
    </div>
  </form>
"""


def render_upload_page(notice: Optional[str] = None) -> str:
    body = f"""
  <h1>TRACKLIST GENERATOR</h1>
  {_notice_html(notice)}
  {_upload_form()}
  <div>
    <p>To export your tracklist from Rekordbox:</p>
    <ol>
      <li>Open Rekordbox and select your playlist.</li>
      <li>Right-click and choose <strong>Export Playlist</strong>.</li>
      <li>Select <strong>Export as .txt file</strong>.</li>
      <li>Find the exported file in your chosen destination.</li>
    </ol>
  </div>
  {_UPLOAD_SCRIPT}
"""
    return _page("Tracklist Generator", body)


def render_session_page(session: TracklistSession, notice: Optional[str] = None) -> str:
    headers = session.headers
    sid = html.escape(session.session_id)

    header_cells = "".join(
        f'<th class="used">{html.escape(h)}</th>' if known_header(h) else f"<th>{html.escape(h)}</th>"
        for h in headers
    )

    rows = []
    for t in session.tracks:
        cells = "".join(f"<td>{html.escape(str(t.get(h) or ''))}</td>" for h in headers)
        rows.append(f"<tr>{cells}</tr>")
    rows_html = "\n".join(rows)

    if session.show_numbers:
        toggle_label = "Hide numbers"
        toggle_value = "false"
    else:
        toggle_label = "Show numbers"
        toggle_value = "true"

    title = session.filename or "Tracklist"
    body = f"""
  <h1>TRACKLIST GENERATOR</h1>
  {_notice_html(notice)}
  <p>{html.escape(title)} &middot; {len(session.tracks)} tracks</p>
  <form action="/sessions/{sid}/numbering" method="post" style="display:inline">
    <input type="hidden" name="show_numbers" value="{toggle_value}" />
    <button type="submit">{toggle_label}</button>
  </form>
  <button id="copy-button" type="button">Copy tracklist</button>
  <a class="button" href="/api/sessions/{sid}/tracklist.txt">Download .txt</a>
  <form action="/sessions/{sid}/reset" method="post" style="display:inline">
    <button type="submit">Reset</button>
  </form>
  <p id="copy-notice" class="notice"></p>
  <textarea id="tracklist" readonly>{html.escape(session.formatted)}</textarea>
  <div class="scroll">
    <table>
      <thead>
        <tr>{header_cells}</tr>
      </thead>
      <tbody>
        {rows_html}
      </tbody>
    </table>
  </div>
  {_COPY_SCRIPT}
"""
    return _page(f"{title} - Tracklist Generator", body)
