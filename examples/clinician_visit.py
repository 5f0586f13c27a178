"""
Clinician Visit Example - Register a patient, attach documents, book a follow-up.

Assumes a clinician session is already stored (see basic_session.py).
"""

import asyncio
import sys
from datetime import date, timedelta
from pathlib import Path

from anvaya_client import AnvayaClient
from anvaya_client.domain import (
    AppointmentRequest,
    Gender,
    PatientRegistration,
    PersonalDetails,
    SymptomsVitals,
    UploadFile,
)
from anvaya_client.ports import AppArea


async def main(document_paths):
    async with AnvayaClient() as client:
        await client.start()

        decision = client.can_enter(AppArea.CLINICIAN)
        if not decision.allowed:
            print(f"Clinician area unavailable: {decision.reason}")
            return

        registration = PatientRegistration(
            personal_details=PersonalDetails(
                email="ravi@example.com",
                name="Ravi Kumar",
                password="changeme",
                phone_number="9000000000",
                adhar_card="123412341234",
                gender=Gender.MALE,
                age=42,
            ),
            symptoms_vitals=SymptomsVitals(
                appointment_date=date.today(),
                symptoms=["cough", "fever"],
                temperature="101F",
            ),
        )

        created = await client.api.create_patient(registration)
        if not created.success:
            print(f"Registration failed: {created.message}")
            return

        patient_id = created.data.get("id") or created.data.get("_id")
        print(f"Registered patient {patient_id}")

        if document_paths:
            files = [UploadFile(name=p.name, content=p.read_bytes()) for p in map(Path, document_paths)]
            uploaded = await client.api.upload_documents(patient_id, files)
            print(f"Uploaded {len(files)} document(s): {uploaded.success or uploaded.message}")

        booked = await client.api.create_appointment(
            AppointmentRequest(
                patient_id=patient_id,
                appointment_date=date.today() + timedelta(days=7),
                appointment_time="10:30",
                reason="Follow-up",
            )
        )
        print(f"Follow-up booked: {booked.success or booked.message}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
