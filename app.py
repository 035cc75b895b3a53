"""
Innovelous Tech Site
====================

Run with:
    python app.py

Seed the admin login first:
    flask --app app create-admin admin@example.com

Visit:
    http://localhost:5000        - Homepage
    http://localhost:5000/admin  - Admin login
"""

from flask import Flask
from innovelous import Innovelous
from innovelous.core.config import Config

app = Flask(__name__)
app.config['SECRET_KEY'] = Config.SECRET_KEY
app.config['LOG_DB'] = Config.LOG_DB
app.config['MAX_CONTENT_LENGTH'] = 50 * 1024 * 1024

innovelous = Innovelous(app)


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print(Config.BRAND_NAME)
    print("=" * 60)
    print(f"Homepage:        http://localhost:{Config.port}")
    print(f"Portfolio:       http://localhost:{Config.port}/portfolio")
    print(f"Admin Login:     http://localhost:{Config.port}/admin")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
