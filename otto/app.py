#!/usr/bin/env python3
"""
Otto - a small Flask dashboard for the containers on the local engine.

Lists containers grouped by state and lets the user start, pause,
unpause or stop them.
"""

from flask import Flask, Response, jsonify, render_template
from jinja2 import TemplateError
import logging
import sys
from datetime import datetime

from otto import config
from otto.engine import Engine, EngineError
from otto.inventory import EngineInfo, PageData, build_page, project_engine_info

logger = logging.getLogger(__name__)

ACTIONS = ('start', 'pause', 'unpause', 'stop')


def plain(message, status):
    """Error body as plain text, exactly as the engine reported it."""
    return Response(message, status=status, mimetype='text/plain')


def create_app(engine=None, engine_enabled=config.ENGINE_ENABLED):
    """
    Build the dashboard application.

    Templates and assets ship inside the package under web/. With the
    engine disabled the page is served empty and no action routes exist.
    """
    app = Flask(
        __name__,
        template_folder='web',
        static_folder='web/assets',
        static_url_path='/assets',
    )

    if engine_enabled and engine is None:
        engine = Engine()
    if not engine_enabled:
        engine = None
    app.extensions['engine'] = engine

    def load_page():
        page = build_page(engine.list_containers(all=True))
        try:
            page.engine = project_engine_info(engine.info())
        except EngineError as e:
            logger.warning(f'Engine info unavailable: {e}')
            page.engine = EngineInfo()
        return page

    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def index(path):
        """Main route."""
        if engine is None:
            page = PageData()
        else:
            try:
                page = load_page()
            except EngineError as e:
                logger.error(f'Error listing containers: {e}')
                return plain(str(e), 500)

        try:
            return render_template('index.html', page=page, stub=engine is None)
        except TemplateError as e:
            logger.error(f'Error rendering page: {e}')
            return plain(str(e), 500)

    @app.route('/api/containers')
    def api_containers():
        """JSON form of the listing."""
        if engine is None:
            page = PageData()
        else:
            try:
                page = load_page()
            except EngineError as e:
                logger.error(f'Error listing containers: {e}')
                return jsonify({
                    'error': str(e),
                    'timestamp': datetime.now().isoformat()
                }), 500

        data = page.to_dict()
        data['error'] = None
        data['timestamp'] = datetime.now().isoformat()
        return jsonify(data)

    @app.route('/health')
    def health():
        """Health check endpoint."""
        if engine is None:
            engine_state = 'disabled'
        else:
            engine_state = 'up' if engine.ping() else 'down'
        return jsonify({
            'status': 'healthy',
            'engine': engine_state,
            'timestamp': datetime.now().isoformat()
        })

    if engine is not None:
        @app.route('/containers/<container_id>/<action>', methods=['POST'])
        def container_action(container_id, action):
            """Run one lifecycle action against a container."""
            if action not in ACTIONS:
                return plain('unknown action', 400)

            try:
                getattr(engine, action)(container_id)
            except EngineError as e:
                logger.error(f'Error running {action} on {container_id}: {e}')
                return plain(str(e), 500)

            logger.info(f'{action} {container_id}')
            return '', 204

    return app


def main():
    logging.basicConfig(level=config.LOG_LEVEL, stream=sys.stdout)

    app = create_app()
    engine = app.extensions['engine']
    if engine is not None:
        engine.open()

    logger.info(f'Serving on port {config.PORT}')
    try:
        app.run(host=config.HOST, port=config.PORT, debug=False, threaded=True)
    except OSError as e:
        logger.error(e)
        sys.exit(1)
    except SystemExit:
        # werkzeug reports a port in use itself, then exits with status 1
        logger.error(f'Could not bind to port {config.PORT}')
        raise
    finally:
        if engine is not None:
            engine.close()


if __name__ == '__main__':
    main()
