import logging
import os

from flask import Flask, jsonify, current_app
from config import get_config
from routes.quiz import quiz_bp
from routes.results import results_bp
from services.content_store import ContentStore


def create_app(config_class=None):
    config_class = config_class or get_config()

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config['IDLE_TIMEOUT'] = config_class.idle_timeout()

    logging.basicConfig(
        level=getattr(logging, app.config['LOG_LEVEL'], logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s - %(message)s'
    )

    # Question catalog + weight table, loaded once per app
    app.extensions['content_store'] = ContentStore().load(
        app.config['QUESTIONS_PATH'],
        app.config['WEIGHTS_PATH']
    )

    # Register blueprints
    app.register_blueprint(quiz_bp, url_prefix='/api/quiz')
    app.register_blueprint(results_bp, url_prefix='/api/results')

    app.add_url_rule('/health', 'health', health)

    return app


def health():
    status = current_app.extensions['content_store'].status()
    status['kiosk'] = current_app.config['KIOSK_MODE']
    return jsonify(status), (200 if status['ready'] else 503)


if __name__ == '__main__':
    app = create_app()
    port = int(os.environ.get('PORT', 5000))
    app.run(debug=app.config['DEBUG'], host='0.0.0.0', port=port)
