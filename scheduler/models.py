from .data.models import Card, Collection, ReviewLog  # noqa: F401
