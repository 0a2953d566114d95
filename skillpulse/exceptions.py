"""
Domain exceptions raised by the persistence and service layers
"""


class SkillPulseError(Exception):
    """Base class for errors that map to a client-facing HTTP status"""
    status_code = 500

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class NotFoundError(SkillPulseError):
    """Referenced entity does not exist"""
    status_code = 404

    def __init__(self, entity, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ValidationError(SkillPulseError):
    """Input rejected before it reached the database"""
    status_code = 422

    def __init__(self, message, field=None):
        self.field = field
        super().__init__(message)

    def to_dict(self):
        """Field-level error in the same shape FastAPI uses for request validation"""
        return {
            "loc": ["body", self.field] if self.field else ["body"],
            "msg": self.message,
            "type": "value_error",
        }
