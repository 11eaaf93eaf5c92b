from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.db.models import F, Q
import uuid


class UserRole(models.TextChoices):
    PARTICIPANT = 'participant', 'Participant'
    ADMIN = 'admin', 'Admin'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', UserRole.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)

    def participants(self):
        return self.filter(role=UserRole.PARTICIPANT, is_active=True)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Quest participant (or administrator).

    ``partner`` is the reciprocal partnership reference. It is only ever
    written by ``apps.partnerships.services``; the one-to-one column makes it
    impossible for two users to point at the same partner.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)
    telegram_username = models.CharField(max_length=64, blank=True)

    role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.PARTICIPANT)
    partner = models.OneToOneField(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['role', 'is_active'], name='users_role_active_idx'),
            models.Index(fields=['created_at'], name='users_created_at_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(partner=F('id')),
                name='users_partner_not_self',
            ),
        ]

    def __str__(self):
        return self.email

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    def get_display_name(self):
        """Return display name or email prefix."""
        return self.display_name or self.email.split('@')[0]
