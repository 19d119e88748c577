from typing import Dict, List


class DomainException(Exception):
    pass


class RequestValidationFailed(DomainException):
    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Request validation failed for: {fields}")
