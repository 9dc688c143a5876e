#!/usr/bin/env python3
"""
Скрипт для заполнения каталога базовыми договорами CCNL
"""

import asyncio
import sys
from datetime import date
from pathlib import Path

# Добавляем корневую папку проекта в Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.database.session import get_async_session
from apps.api.services.agreement_service import AgreementService
from core.logging.logger import logger


def _levels(*rows):
    return [
        {"code": code, "description": description, "base_salary_monthly": salary}
        for code, description, salary in rows
    ]


ENGEB_FIXED_RULES = [
    {"name": "Ente Bilaterale ENGEB", "is_percentage": False, "amount": 10, "category": "bilateral"},
    {"name": "COASCO", "is_percentage": False, "amount": 10, "category": "bilateral"},
    {"name": "Assistenza Sanitaria Integrativa", "is_percentage": False, "amount": 15, "category": "health"},
]

AGREEMENTS = [
    {
        "external_id": "engeb_multisettore",
        "name": "ENGEB Multisettore",
        "sector": "Multiservizi, Pulizie, Logistica",
        "sector_category": "multiservizi",
        "issuer": "CONFAEL-FAL / CONFIMITALIA / SNALP",
        "valid_from": date(2022, 6, 1),
        "valid_to": date(2025, 5, 31),
        "is_house": True,
        "levels": _levels(
            ("1", "Operaio generico", 1450),
            ("2", "Operaio specializzato", 1550),
            ("3", "Capo operaio / Coordinatore", 1700),
            ("4", "Impiegato amministrativo", 1850),
        ),
        "additional_costs": {"severance_rate": 6.5, "social_rate": 24.0, "other_rate": 2.5},
        "contribution_rules": ENGEB_FIXED_RULES,
    },
    {
        "external_id": "engeb_turismo",
        "name": "ENGEB Turismo e Pubblici Esercizi",
        "sector": "Turismo, Alberghi, Ristorazione",
        "sector_category": "turismo",
        "issuer": "CONFAEL-FAL / SNALP",
        "valid_from": date(2023, 6, 1),
        "valid_to": date(2026, 5, 31),
        "is_house": True,
        "levels": _levels(
            ("1", "Cameriere, Barista", 1400),
            ("2", "Capo cameriere, Barista senior", 1550),
            ("3", "Cuoco, Chef", 1750),
            ("4", "Direttore di sala, Maître", 1950),
            ("5", "Responsabile struttura", 2200),
        ),
        "additional_costs": {"severance_rate": 6.5, "social_rate": 23.0, "other_rate": 3.0},
        "contribution_rules": ENGEB_FIXED_RULES,
    },
    {
        "external_id": "ebinter_terziario",
        "name": "EBINTER Terziario, Distribuzione e Servizi",
        "sector": "Terziario, Distribuzione, Servizi",
        "sector_category": "servizi",
        "issuer": "Confcommercio / FILCAMS CGIL / FISASCAT CISL",
        "valid_from": date(2023, 4, 1),
        "valid_to": date(2027, 3, 31),
        "levels": _levels(
            ("1", "Addetto generico", 1500),
            ("2", "Addetto specializzato", 1620),
            ("3", "Capo area", 1850),
            ("4", "Responsabile di punto", 2050),
        ),
        "additional_costs": {"severance_rate": 6.5, "social_rate": 24.5, "other_rate": 2.5},
        "contribution_rules": [
            {"name": "Contributo EBINTER", "is_percentage": True, "percentage": 0.45, "category": "bilateral"},
            {"name": "COASCO", "is_percentage": True, "percentage": 1.1, "category": "pension"},
            {"name": "Assistenza Sanitaria", "is_percentage": True, "percentage": 0.7, "category": "health"},
            {"name": "Fondo Previdenziale", "is_percentage": True, "percentage": 1.4, "category": "pension"},
        ],
    },
    {
        "external_id": "ccnl_artigianato",
        "name": "Artigianato e Piccole Imprese",
        "sector": "Artigianato",
        "sector_category": "artigianato",
        "issuer": "CONFIMITALIA",
        "valid_from": date(2023, 1, 1),
        "valid_to": date(2026, 12, 31),
        "levels": _levels(
            ("1", "Apprendista", 1100),
            ("2", "Operaio generico", 1380),
            ("3", "Operaio specializzato", 1550),
            ("4", "Capo operaio", 1750),
        ),
        "additional_costs": {"severance_rate": 6.5, "social_rate": 23.5, "other_rate": 1.5},
        "contribution_rules": [
            {"name": "Contributo Ente Bilaterale", "is_percentage": True, "percentage": 0.3, "category": "bilateral"},
            {"name": "COASCO", "is_percentage": True, "percentage": 0.7, "category": "pension"},
            {"name": "Assistenza Sanitaria", "is_percentage": True, "percentage": 0.4, "category": "health"},
            {"name": "Fondo Previdenziale Artigianato", "is_percentage": True, "percentage": 0.9, "category": "pension"},
        ],
    },
]


async def seed_agreements():
    """Создает договоры каталога, пропуская уже существующие"""
    logger.info("Начинаю заполнение каталога договоров...")

    async with get_async_session() as session:
        agreement_service = AgreementService(session)

        created_count = 0
        for agreement_data in AGREEMENTS:
            existing = await agreement_service.get_by_external_id(agreement_data["external_id"])
            if existing:
                logger.info(f"Договор {agreement_data['external_id']} уже существует, пропускаю")
                continue

            agreement = await agreement_service.create_agreement(agreement_data)
            logger.info(f"Создан договор: {agreement.name} (ID: {agreement.id})")
            created_count += 1

        logger.info(f"Успешно создано {created_count} договоров")


async def main():
    """Основная функция"""
    try:
        await seed_agreements()
        print("✅ Каталог договоров заполнен!")
    except Exception as e:
        logger.error(f"Критическая ошибка при заполнении каталога: {e}")
        print(f"❌ Ошибка: {e}")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
