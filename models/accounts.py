"""
Customer account.

Passwords are stored and compared as plain text. This matches the stored
record format the rental data already uses; hashing would change that
format and is deliberately not done here.
"""
from flask_login import UserMixin


def normalize_email(email):
    """Case-insensitive key used to match accounts."""
    return (email or '').strip().lower()


class Account(UserMixin):
    """A registered customer"""

    def __init__(self, name, email, password, phone=None, location=None):
        self.name = name
        self.email = email
        self.password = password
        self.phone = phone
        self.location = location

    @property
    def email_key(self):
        return normalize_email(self.email)

    def matches_email(self, email):
        return self.email_key == normalize_email(email)

    def check_password(self, password):
        """Exact string comparison against the stored password."""
        return self.password == password

    def get_id(self):
        # Flask-Login session identifier
        return self.email_key

    def to_record(self):
        return {
            'name': self.name,
            'email': self.email,
            'password': self.password,
            'phone': self.phone,
            'location': self.location,
        }

    @classmethod
    def from_record(cls, record):
        return cls(
            name=record['name'],
            email=record['email'],
            password=record['password'],
            phone=record.get('phone'),
            location=record.get('location'),
        )

    def to_dict(self):
        """Public view, never includes the password."""
        return {
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'location': self.location,
        }

    def __repr__(self):
        return f'<Account {self.email}>'
