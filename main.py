"""
main.py - Algorithm Visualizer Dev Server
==========================================
Runs the Flask JSON API with settings taken from the environment.

    ALGOVIZ_PORT=8000 ALGOVIZ_DEBUG=true python main.py
"""

import structlog

from algoviz.app import create_app
from algoviz.settings import get_settings

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    settings = get_settings()
    app = create_app(settings)
    log.info("server.starting", host=settings.host, port=settings.port, env=settings.env)
    app.run(debug=settings.debug, host=settings.host, port=settings.port)
