from .open_hours import OpenHoursStore

__all__ = ['OpenHoursStore']
