#!/usr/bin/env python3
"""
Development seeding script.
Adds a few sample services to the configured store for local testing.
"""

from catalog.core.config import settings
from catalog.errors import ServiceValidationError
from catalog.repos import build_store
from catalog.schemas.services import ServiceCreate


SAMPLE_SERVICES = [
    ServiceCreate(
        app_code="svc-billing",
        app_name="Billing API",
        env="prod",
        cloud="aws",
        region="us-east-1",
        team_name="Payments",
        pm_contact="alice.pm@example.com",
        team_contact="payments@example.com",
    ),
    ServiceCreate(
        app_code="svc-search",
        app_name="Search Indexer",
        env="stage",
        cloud="gcp",
        region="europe-west1",
        team_name="Discovery",
        pm_contact="bob.pm@example.com",
        team_contact="discovery@example.com",
    ),
    ServiceCreate(
        app_code="svc-auth",
        app_name="Auth Gateway",
        env="dev",
        cloud="azure",
        region="eastus",
        team_name="Identity",
        pm_contact="carol.pm@example.com",
        team_contact="identity@example.com",
    ),
]


def create_sample_data():
    """Create sample services, skipping codes that already exist"""
    store = build_store(settings)
    store.load()
    print(f"Seeding {settings.store_backend} store...")

    existing_codes = {service.app_code for service in store.all()}
    for sample in SAMPLE_SERVICES:
        if sample.app_code in existing_codes:
            print(f"   • {sample.app_code} already exists, skipping")
            continue
        try:
            service = store.add(sample)
        except ServiceValidationError as e:
            print(f"   • {sample.app_code} rejected: {e}")
            continue
        print(f"   • Created {service.app_code} (id: {service.id})")

    print(f"Done. {len(store.all())} services in catalog")


if __name__ == "__main__":
    create_sample_data()
