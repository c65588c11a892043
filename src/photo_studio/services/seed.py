"""Sample records for a fresh studio ledger."""

from decimal import Decimal

from photo_studio.domain.equipment import EquipmentCategory, EquipmentRequest
from photo_studio.domain.models import ClientRequest, StaffRequest
from photo_studio.services.ledger import InventoryLedger

SAMPLE_CLIENTS = (
    ClientRequest(
        first_name="Anna",
        last_name="Ivanova",
        phone="+79161234567",
        email="anna@mail.ru",
    ),
    ClientRequest(
        first_name="Petr",
        last_name="Sidorov",
        phone="+79167654321",
        email="petr@mail.ru",
    ),
)

SAMPLE_STAFF = (
    StaffRequest(
        first_name="Maria",
        last_name="Petrova",
        specialization="Portrait photography",
        hourly_rate=Decimal(2000),
        experience_years=5,
    ),
    StaffRequest(
        first_name="Alexey",
        last_name="Kuznetsov",
        specialization="Wedding photography",
        hourly_rate=Decimal(3000),
        experience_years=8,
    ),
)

SAMPLE_EQUIPMENT = (
    EquipmentRequest(
        name="Canon EOS R5",
        category=EquipmentCategory.CAMERA,
        model="EOS R5",
        rental_price=Decimal(1500),
    ),
    EquipmentRequest(
        name="Sony A7III",
        category=EquipmentCategory.CAMERA,
        model="A7III",
        rental_price=Decimal(1200),
    ),
    EquipmentRequest(
        name="85mm lens",
        category=EquipmentCategory.LENS,
        model="85mm f/1.8",
        rental_price=Decimal(500),
    ),
)


def seed_sample_data(ledger: InventoryLedger) -> None:
    """Add the sample clients, photographers and equipment."""
    for client in SAMPLE_CLIENTS:
        ledger.add_client(client)
    for staff in SAMPLE_STAFF:
        ledger.add_staff(staff)
    for equipment in SAMPLE_EQUIPMENT:
        ledger.add_equipment(equipment)
