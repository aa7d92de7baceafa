"""
FolioCMS Starter Template
=========================

A ready-to-run portfolio backend with every FolioCMS module enabled.

Run with:
    python app.py

Visit:
    http://localhost:3000             - Portfolio (files in ./public)
    http://localhost:3000/api/projects - Projects API
    http://localhost:3000/api/health   - Health check
"""

import os

from flask import Flask, send_from_directory
from foliocms import FolioCMS
from foliocms.core.config import Config

PUBLIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'public')

# Create Flask app
app = Flask(__name__, static_folder=None)
app.config['SECRET_KEY'] = Config.SECRET_KEY

# Session security
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

# Initialize FolioCMS - creates data directories and registers the API
foliocms = FolioCMS(app)


# =============================================================================
# Static portfolio
# =============================================================================

@app.route('/')
def index():
    """Portfolio homepage"""
    return send_from_directory(PUBLIC_DIR, 'index.html')


@app.route('/<path:filename>')
def public_files(filename):
    """Portfolio assets"""
    return send_from_directory(PUBLIC_DIR, filename)


# =============================================================================
# Run the app
# =============================================================================

if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("FolioCMS Starter Template")
    print("=" * 60)
    print(f"Portfolio:       http://localhost:{Config.port}")
    print(f"Projects API:    http://localhost:{Config.port}/api/projects")
    print(f"Health:          http://localhost:{Config.port}/api/health")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
