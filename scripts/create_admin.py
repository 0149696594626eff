"""Create an admin account, or reset the password of an existing one.

Usage:
    python scripts/create_admin.py <username> <password> [--email EMAIL]
"""
import argparse
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rp_portal import create_app  # noqa: E402
from rp_portal.config import config_for  # noqa: E402
from rp_portal.auth.credentials import hash_password  # noqa: E402
from rp_portal.extensions import db  # noqa: E402
from rp_portal.models import AdminUser  # noqa: E402


def main(argv=None):
    parser = argparse.ArgumentParser(description='Create or reset an admin account.')
    parser.add_argument('username')
    parser.add_argument('password')
    parser.add_argument('--email')
    parser.add_argument('--scheme', choices=['sha256', 'werkzeug'],
                        help='hash scheme (default: PASSWORD_HASH_SCHEME)')
    args = parser.parse_args(argv)

    app = create_app(config_for())
    with app.app_context():
        minimum = app.config['ADMIN_MIN_PASSWORD_LENGTH']
        if len(args.password) < minimum:
            parser.error(f'password must be at least {minimum} characters long')

        admin = AdminUser.query.filter_by(username=args.username).first()
        if admin is None:
            admin = AdminUser(username=args.username, email=args.email)
            db.session.add(admin)
            print(f'New admin "{args.username}" created')
        else:
            admin.active = True
            if args.email:
                admin.email = args.email
            print(f'Existing admin "{args.username}" reset')

        admin.password = hash_password(args.password, scheme=args.scheme)
        db.session.commit()


if __name__ == '__main__':
    main()
