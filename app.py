"""
RP Portal
Application Entry Point

This file serves as the entry point for the Flask application.
It uses the application factory pattern defined in the rp_portal package.
"""

from rp_portal import create_app
from rp_portal.config import config_for

# Create the Flask application using the factory
app = create_app(config_for())

if __name__ == '__main__':
    app.run(debug=app.config.get('APP_ENV') != 'production', host='0.0.0.0', port=5000)
