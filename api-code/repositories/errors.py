class DuplicateEmailError(Exception):
    """Another account already owns the email being written."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email {email} is already in use")
