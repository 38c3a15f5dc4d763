from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """
    Learner account. Owns collections of cards; authentication details are
    left to Django's default user fields.
    """

    pass
