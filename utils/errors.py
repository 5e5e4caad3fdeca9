from typing import Dict


class StepChallengeError(Exception):
    """Base class for errors raised by the step challenge core."""


class ValidationError(StepChallengeError):
    """A submission failed one or more field rules. `errors` maps field -> message."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


class DuplicateSubmissionError(StepChallengeError):
    def __init__(self, date: str):
        self.date = date
        super().__init__(
            f"You have already submitted steps for {date}. Only one submission per day is allowed."
        )


class NotFoundError(StepChallengeError):
    """Retract/delete targeted a student or day that is not in the store."""


class StoreReadError(StepChallengeError):
    pass


class StoreWriteError(StepChallengeError):
    pass
