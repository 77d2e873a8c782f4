"""Email normalization shared by the models and the pure engines. No Django imports."""


def normalize_member_email(email):
    """Emails are the roster identity key: compare them lowercased and trimmed."""
    return (email or '').strip().lower()
