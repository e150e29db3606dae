"""
Authentication Forms
CSRF-protected forms for customer registration and login
"""
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email, Length, Optional


class LoginForm(FlaskForm):
    """Login form with CSRF protection"""
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])
    remember = BooleanField('Remember Me')


class RegisterForm(FlaskForm):
    """Customer registration form"""
    name = StringField('Full Name', validators=[
        DataRequired(message='Your name is required'),
        Length(max=150, message='Name must be at most 150 characters')
    ])
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])
    phone = StringField('Phone', validators=[Optional(), Length(max=30)])
    location = StringField('Location', validators=[Optional(), Length(max=150)])
