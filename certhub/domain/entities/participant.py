from dataclasses import dataclass


@dataclass
class RegistrationParticipant:
    """Participant of a training registration, as seen by the certificate core.

    ``attendance_status`` is tri-state: ``None`` until attendance is taken.
    """

    registration_participant_id: str
    training_id: str | None
    attendance_status: bool | None = None
    has_certificate: bool = False

    @property
    def has_attended(self) -> bool:
        return self.attendance_status is True
