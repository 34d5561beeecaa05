class StepValidationError(ValueError):
    """Raised by a field parser when input is outside the field's domain."""

    def __init__(self, user_message: str) -> None:
        self.user_message = user_message
        super().__init__(user_message)
