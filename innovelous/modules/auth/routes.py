"""
Admin Auth Routes
=================
"""

from flask import render_template, request, redirect, url_for, flash
from . import auth_bp
from .gate import get_auth_gate, admin_required, password_too_long, MIN_PASSWORD_LENGTH, MAX_PASSWORD_BYTES


@auth_bp.before_app_request
def restore_admin_session():
    """Resolve the admin flag before any view runs"""
    get_auth_gate().restore()


def _safe_next(target):
    """Only follow same-site relative redirects"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@auth_bp.route('/', methods=['GET', 'POST'])
def login():
    """Admin login route"""
    gate = get_auth_gate()

    if request.method == 'GET' and gate.is_authenticated:
        return redirect(url_for('dashboard.dashboard'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please enter both email and password', 'error')
            return render_template('auth/login.html', email=email), 400

        if gate.login(email, password):
            flash('Login successful', 'success')
            next_page = _safe_next(request.args.get('next'))
            return redirect(next_page or url_for('dashboard.dashboard'))

        flash('Invalid email or password', 'error')
        return render_template('auth/login.html', email=email), 401

    return render_template('auth/login.html')


@auth_bp.route('/logout')
def logout():
    """Admin logout route"""
    get_auth_gate().logout()
    flash('You have been logged out', 'info')
    return redirect(url_for('auth.login'))


@auth_bp.route('/change-password', methods=['POST'])
@admin_required
def change_password():
    """Change admin password"""
    current_password = request.form.get('current_password', '')
    new_password = request.form.get('new_password', '')
    confirm_password = request.form.get('confirm_password', '')
    back = url_for('dashboard.dashboard', tab='settings')

    if not all([current_password, new_password, confirm_password]):
        flash('All fields are required', 'error')
        return redirect(back)

    if new_password != confirm_password:
        flash('New passwords do not match', 'error')
        return redirect(back)

    if len(new_password) < MIN_PASSWORD_LENGTH:
        flash(f'Password must be at least {MIN_PASSWORD_LENGTH} characters long', 'error')
        return redirect(back)

    if password_too_long(new_password):
        flash(f'Password must be at most {MAX_PASSWORD_BYTES} bytes long', 'error')
        return redirect(back)

    if get_auth_gate().change_password(current_password, new_password):
        flash('Password changed!', 'success')
    else:
        flash('Current password is incorrect', 'error')
    return redirect(back)
