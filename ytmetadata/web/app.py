"""Flask page: input form, share link and the three metadata sections."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from flask import Flask, redirect, render_template_string, request, url_for

from .. import debug_log
from ..config import AppConfig, load_config
from ..dispatcher import Dispatcher, PageResult, empty_result
from ..parts import ENTITY_TYPES, RenderContext
from ..url_parser import classify_input
from ..youtube_api import YouTubeClient

logger = logging.getLogger(__name__)

SECTION_TITLES = {
    "video": "Video",
    "channel": "Channel",
    "playlist": "Playlist",
}

PAGE_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>YouTube Metadata</title>
    <style>
        body { font-family: system-ui, sans-serif; max-width: 1000px; margin: 2rem auto; padding: 0 1rem; }
        h1 { font-size: 1.5rem; }
        h2 { font-size: 1.2rem; }
        form { display: flex; gap: 0.5rem; flex-wrap: wrap; }
        input[type=text] { flex: 1; min-width: 200px; padding: 0.5rem; }
        .btn { padding: 0.5rem 1rem; background: #333; color: white; border: none;
            border-radius: 4px; cursor: pointer; }
        .btn:hover { background: #555; }
        .share { width: 100%; margin-top: 0.5rem; padding: 0.5rem; color: #666; }
        .errors { color: #a00; }
        .part-section { background: #f5f5f5; padding: 0.5rem 1rem; border-radius: 8px; margin: 0.5rem 0; }
        .section-header { font-weight: 600; }
        .section-header.unknown::before { content: "? "; color: #999; }
        .section-header.good::before { content: "\\2713  "; color: #0a0; }
        .section-header.bad::before { content: "\\2212  "; color: #a00; }
        pre { background: #fff; padding: 0.5rem; overflow-x: auto; max-height: 400px; }
        .mb-15 { margin-bottom: 15px; }
        .bad { color: #a00; }
        .orange { color: orange; }
        .tag { display: inline-block; background: #ddd; border-radius: 4px; padding: 0 0.4rem; margin: 0 0.2rem; }
        .profile { border-radius: 50%; }
        .thumbnails { display: flex; gap: 1rem; flex-wrap: wrap; }
        .debug { font-family: monospace; font-size: 0.8rem; color: #666; border-top: 1px solid #ddd; }
    </style>
</head>
<body>
    <h1>YouTube Metadata</h1>
    <form method="post" action="{{ url_for('index') }}">
        <input type="text" id="value" name="url" value="{{ value }}"
            placeholder="Paste a YouTube video, playlist or channel URL..." autofocus>
        <button type="submit" id="submit" class="btn">Submit</button>
        <input type="text" id="shareLink" class="share" readonly
            value="{{ share_link or '' }}" {{ '' if share_link else 'disabled' }}>
    </form>

    {% if result.errors %}
    <div class="errors">
        {% for error in result.errors %}<p>{{ error }}</p>{% endfor %}
    </div>
    {% endif %}

    {% for entity in entity_types if entity in result.visible %}
    {% set section = result.sections[entity] %}
    <div id="{{ entity }}">
        <h2>{{ section_titles[entity] }}</h2>
        {% if entity == 'video' and result.thumbnails %}
        <div id="thumbnails" class="thumbnails">
            {% for thumb in result.thumbnails %}
            <div class="mb-15 column">
                <a href="{{ thumb.search_url }}" target="_blank">
                    <img src="{{ thumb.url }}" alt="Thumb {{ thumb.index }}" style="max-width: 200px;">
                    <p>Click for reverse image search</p>
                </a>
            </div>
            {% endfor %}
        </div>
        {% endif %}
        <div id="{{ entity }}-section">
            {% for panel in section.panels %}
            <div id="{{ panel.name }}" class="part-section">
                <div class="section-header {{ panel.status }}"><span>{{ panel.title }}</span></div>
                {% if panel.raw_json is not none %}
                <pre><code class="json-lang">{{ panel.raw_json }}</code></pre>
                {% endif %}
                {% for fragment in panel.markup %}{{ fragment }}{% endfor %}
                {% if panel.message %}<p class="mb-15 bad">{{ panel.message }}</p>{% endif %}
            </div>
            {% endfor %}
        </div>
    </div>
    {% endfor %}

    {% if debug_lines %}
    <div class="debug">
        {% for line in debug_lines %}<div>{{ line }}</div>{% endfor %}
    </div>
    {% endif %}
</body>
</html>
"""


def _is_true(value: Optional[str]) -> bool:
    return str(value).lower() == "true"


def create_app(
    config: Optional[AppConfig] = None,
    client: Optional[YouTubeClient] = None,
    context_factory: Optional[Callable[[], RenderContext]] = None,
) -> Flask:
    """Create and configure the Flask app."""
    config = config or load_config()
    client = client or YouTubeClient(config.api_key, timeout=config.request_timeout)
    if context_factory is None:

        def context_factory() -> RenderContext:
            return RenderContext(maps_api_key=config.maps_api_key)

    dispatcher = Dispatcher(client, context_factory)
    if config.debug_mode:
        debug_log.install()

    app = Flask(__name__)

    def _render(value: str, result: PageResult, share_link: Optional[str]) -> str:
        return render_template_string(
            PAGE_TEMPLATE,
            value=value,
            result=result,
            share_link=share_link,
            entity_types=ENTITY_TYPES,
            section_titles=SECTION_TITLES,
            debug_lines=debug_log.get_lines() if config.debug_mode else [],
        )

    @app.route("/", methods=["GET"])
    def index():
        """Pre-fill from ?url=, and run it right away when &submit=true."""
        value = request.args.get("url", "")
        if not value or not _is_true(request.args.get("submit")):
            return _render(value, empty_result(), None)

        parsed = classify_input(value)
        result = dispatcher.submit(parsed)
        share_link = url_for("index", url=value, submit="true", _external=True)
        return _render(value, result, share_link)

    @app.route("/", methods=["POST"])
    def submit():
        """Form submission: redirect so the address bar holds the share link."""
        value = request.form.get("url", "").strip()
        if not value:
            return redirect(url_for("index"))
        return redirect(url_for("index", url=value, submit="true"))

    return app


def run_web_server(
    host: Optional[str] = None,
    port: Optional[int] = None,
    config: Optional[AppConfig] = None,
) -> None:
    """Run the Flask development server."""
    config = config or load_config()
    app = create_app(config=config)
    app.run(host=host or config.web_host, port=port or config.web_port, threaded=True, use_reloader=False)
