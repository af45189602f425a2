"""Demo client dataset loaded at startup when SEED_DEMO_DATA is enabled."""

from datetime import date

from app.domain.models.client import Client, Document, MortgageStatus, Reminder


def demo_clients() -> list[Client]:
    """Build a fresh copy of the demo clients, newest activity first."""
    return [
        Client(
            id="1001",
            first_name="ישראל",
            last_name="ישראלי",
            phone="050-1234567",
            email="israel@example.com",
            requested_amount=1500000,
            status=MortgageStatus.IN_PROCESS,
            monthly_income=18000,
            credit_score=820,
            joined_date=date(2023, 10, 15),
            notes="לקוח מחפש משכנתא לדירה ראשונה בראשון לציון.",
            documents=[
                Document(id="d1", name="תעודת זהות", type="PDF", is_signed=True, upload_date=date(2023, 10, 16)),
                Document(id="d2", name="תלושי שכר (3 חודשים)", type="PDF", is_signed=False, upload_date=date(2023, 10, 17)),
            ],
            reminders=[
                Reminder(id="r1", due_date=date(2023, 11, 20), due_time="10:00", note="להתקשר לבדוק סטטוס מסמכים"),
            ],
        ),
        Client(
            id="1002",
            first_name="שרה",
            last_name="כהן",
            phone="052-9876543",
            email="sara@example.com",
            requested_amount=850000,
            status=MortgageStatus.APPROVED,
            monthly_income=12500,
            credit_score=750,
            joined_date=date(2023, 9, 20),
            notes="משכנתא לשיפוץ. אישור עקרוני התקבל.",
            documents=[
                Document(id="d3", name="אישור בעלות", type="PDF", is_signed=True, upload_date=date(2023, 9, 21)),
            ],
        ),
        Client(
            id="1003",
            first_name="דוד",
            last_name="לוי",
            phone="054-5555555",
            email="david@example.com",
            requested_amount=2200000,
            status=MortgageStatus.NEW,
            monthly_income=25000,
            credit_score=680,
            joined_date=date(2023, 10, 25),
            notes="פנייה חדשה מאתר האינטרנט.",
        ),
        Client(
            id="1004",
            first_name="מיכל",
            last_name="אברהם",
            phone="053-3334444",
            email="michal@example.com",
            requested_amount=1100000,
            status=MortgageStatus.REJECTED,
            monthly_income=9000,
            credit_score=540,
            joined_date=date(2023, 8, 10),
            notes="BDI שלילי. נדחה בשלב זה.",
            documents=[
                Document(id="d4", name="דוח נתוני אשראי", type="PDF", is_signed=False, upload_date=date(2023, 8, 12)),
            ],
        ),
    ]
