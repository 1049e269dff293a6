"""
Caption Editor - Flask host
Serves the caption API and the WebVTT track for the video being captioned
"""
import logging
from typing import Optional

from flask import Flask

from config import EditorConfig, load_config
from routes.captions import captions_bp
from services.captions_format import TrackEncoder
from services.captions_session import CaptionSession

logger = logging.getLogger(__name__)


def create_app(config: Optional[EditorConfig] = None) -> Flask:
    """Build the Flask app with one caption session per app instance"""
    config = config or load_config()

    logging.basicConfig(level=getattr(logging, config.log_level))

    app = Flask(__name__)
    app.secret_key = config.secret_key
    app.config['TESTING'] = config.testing
    app.config['EDITOR'] = config

    encoder = TrackEncoder(label=config.track_label, srclang=config.track_srclang)
    app.extensions['caption_session'] = CaptionSession(encoder=encoder)

    app.register_blueprint(captions_bp)

    logger.info(f"[OK] Caption editor ready (track: {config.track_label}/{config.track_srclang})")
    return app


if __name__ == '__main__':
    config = load_config()
    app = create_app(config)
    app.run(debug=config.debug, host='0.0.0.0', port=config.port)
