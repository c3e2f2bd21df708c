"""Testing support – fakes for the unit-of-work port."""

from txbus.testing.fakes import RecordingUnitOfWork, RecordingUnitOfWorkFactory

__all__ = ["RecordingUnitOfWork", "RecordingUnitOfWorkFactory"]
