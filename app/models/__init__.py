from app.models.models import OpenHours

__all__ = ["OpenHours"]
