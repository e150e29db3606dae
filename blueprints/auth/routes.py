"""
Authentication Routes
Customer registration, login and logout
"""
from flask import jsonify
from flask_login import login_user, logout_user, current_user, login_required
from . import auth_bp
from .forms import LoginForm, RegisterForm
from extensions import login_manager
from utils.ledger_helpers import get_ledger


@login_manager.user_loader
def load_account(account_id):
    """Flask-Login session ids are account emails."""
    return get_ledger().find_account_by_email(account_id)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify(error='Please log in to access this page.'), 401


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create a customer account"""
    form = RegisterForm()
    if not form.validate_on_submit():
        return jsonify(errors=form.errors), 400

    account = get_ledger().register(
        name=form.name.data.strip(),
        email=form.email.data.strip(),
        password=form.password.data,
        phone=form.phone.data,
        location=form.location.data,
    )
    if account is None:
        return jsonify(error=f'An account with email {form.email.data} already exists.'), 409

    return jsonify(account=account.to_dict()), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Log a customer in with email and password"""
    form = LoginForm()
    if not form.validate_on_submit():
        return jsonify(errors=form.errors), 400

    account = get_ledger().login(form.email.data.strip(), form.password.data)
    if account is None:
        return jsonify(error='Invalid email or password.'), 401

    login_user(account, remember=form.remember.data)
    return jsonify(message=f'Welcome back, {account.name}!', account=account.to_dict())


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    email = current_user.email
    logout_user()
    return jsonify(message=f'Logged out {email}.')
