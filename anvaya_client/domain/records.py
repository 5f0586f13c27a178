"""
Request Records - Typed payloads for the clinical record and scheduling calls.

Field names are snake_case here and serialise to the backend's camelCase.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Any, List, Optional, Union


DateLike = Union[date, datetime, str]


class Gender(Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


def _wire_value(value: Any) -> Any:
    """Convert a field value to its JSON form."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, list):
        return [_wire_value(v) for v in value]
    return value


def _compact(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset fields and convert the rest to wire values."""
    return {k: _wire_value(v) for k, v in fields.items() if v is not None}


@dataclass
class LoginCredentials:
    email: str
    password: str

    def to_dict(self) -> Dict[str, Any]:
        return {"email": self.email, "password": self.password}


@dataclass
class DoctorRegistration:
    """Clinician self-registration (POST /register)."""
    email: str
    password: str
    name: str
    phone_number: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "password": self.password,
            "name": self.name,
            "phoneNumber": self.phone_number,
        }


@dataclass
class PersonalDetails:
    email: str
    name: str
    password: str
    phone_number: str
    adhar_card: str
    gender: Optional[Gender] = None
    age: Optional[int] = None
    address: Optional[str] = None
    pincode: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "email": self.email,
            "name": self.name,
            "password": self.password,
            "phoneNumber": self.phone_number,
            "adharCard": self.adhar_card,
            "gender": self.gender,
            "age": self.age,
            "address": self.address,
            "pincode": self.pincode,
        })


@dataclass
class MedicalHistory:
    pre_existing_conditions: Optional[str] = None
    current_medications: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "preExistingConditions": self.pre_existing_conditions,
            "currentMedications": self.current_medications,
        })


@dataclass
class SymptomsVitals:
    appointment_date: DateLike
    symptoms: List[str] = field(default_factory=list)
    blood_pressure: Optional[str] = None
    temperature: Optional[str] = None
    sugar_level: Optional[str] = None
    pulse_rate: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "appointmentDate": self.appointment_date,
            "symptoms": self.symptoms or None,
            "bloodPressure": self.blood_pressure,
            "temperature": self.temperature,
            "sugarLevel": self.sugar_level,
            "pulseRate": self.pulse_rate,
        })


@dataclass
class DoctorNotes:
    diagnosis: Optional[str] = None
    treatment_advice: Optional[str] = None
    next_appointment_date: Optional[DateLike] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "diagnosis": self.diagnosis,
            "treatmentAdvice": self.treatment_advice,
            "nextAppointmentDate": self.next_appointment_date,
        })


@dataclass
class PatientRegistration:
    """
    Patient record (POST /patients).

    Only personal_details is required; the clinical sections are filled in
    when a clinician registers the patient during a visit.
    """
    personal_details: PersonalDetails
    medical_history: Optional[MedicalHistory] = None
    symptoms_vitals: Optional[SymptomsVitals] = None
    doctor_notes: Optional[DoctorNotes] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"personal_details": self.personal_details.to_dict()}
        if self.medical_history:
            data["medical_history"] = self.medical_history.to_dict()
        if self.symptoms_vitals:
            data["symptoms_vitals"] = self.symptoms_vitals.to_dict()
        if self.doctor_notes:
            data["doctor_notes"] = self.doctor_notes.to_dict()
        return data


@dataclass
class AppointmentRequest:
    patient_id: str
    appointment_date: DateLike
    appointment_time: str
    reason: str
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patientId": self.patient_id,
            "appointmentDate": _wire_value(self.appointment_date),
            "appointmentTime": self.appointment_time,
            "reason": self.reason,
            "notes": self.notes,
        }


@dataclass
class UploadFile:
    """A document attached to a multipart upload."""
    name: str
    content: bytes
    mime_type: Optional[str] = None

    def as_multipart(self) -> tuple:
        """(filename, content, content_type) tuple for a multipart field."""
        return (self.name, self.content, self.mime_type or "application/octet-stream")
