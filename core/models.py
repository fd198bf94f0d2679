"""
Core — Base Models

Reusable abstract models shared by the catalog and the stock ledger.

@file core/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class TimestampMixin(models.Model):
    """Adds created_at / updated_at to any model."""

    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )
    updated_at = models.DateTimeField(
        _('updated at'), auto_now=True,
    )

    class Meta:
        abstract = True


class CreatedAtMixin(models.Model):
    """Creation timestamp only; used for ledger rows that order by insertion."""

    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )

    class Meta:
        abstract = True
