"""
Flask Extensions

Admin identity comes from the `admin_session` cookie through the login
manager's request loader; there are no server-side sessions.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager resolving the current administrator
login_manager = LoginManager()
