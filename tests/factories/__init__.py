"""Test factories for cardform models."""

from tests.factories.cards import CardDetailsFactory, FormSnapshotFactory

__all__ = ["CardDetailsFactory", "FormSnapshotFactory"]
