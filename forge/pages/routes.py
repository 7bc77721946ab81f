"""
Page Routes

HTML pages; their scripts talk to the JSON API under /api.
"""

from flask import render_template
from flask_login import login_required, current_user
from forge.pages import pages_bp


@pages_bp.route('/')
@pages_bp.route('/login')
def login_page():
    return render_template('login.html')


@pages_bp.route('/register')
def register_page():
    return render_template('register.html')


@pages_bp.route('/dashboard')
@login_required
def dashboard():
    """Dashboard for the signed-in user"""
    return render_template('dashboard.html', email=current_user.email)
