"""
Forge Authentication
Application Entry Point

This file serves as the entry point for the Flask application.
It uses the application factory pattern defined in the forge package.
"""

import logging

from forge import create_app

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
logger = logging.getLogger('forge')

# Create the Flask application using the factory
app = create_app()

if __name__ == '__main__':
    port = app.config['PORT']
    logger.info('Forge Authentication running on port %s', port)
    app.run(host=app.config['HOST'], port=port, threaded=True)
