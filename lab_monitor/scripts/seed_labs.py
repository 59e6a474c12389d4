"""
Seed Labs Script
Populates the labs table with a starter set of laboratories.
Existing labs (matched by name) get their location, capacity and equipment
refreshed; their status and lock are left alone.
"""

import sys
import logging

from lab_monitor.database.supabase_client import SupabaseClient
from supabase import Client

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

STARTER_LABS = [
    {
        "name": "Chemistry Lab A",
        "location": "Science Block, Room 101",
        "capacity": 30,
        "equipment": ["Fume Hood", "Projector", "Microphone"],
    },
    {
        "name": "Computer Lab 1",
        "location": "ICT Building, Room 204",
        "capacity": 40,
        "equipment": ["PC/Computer", "Projector", "Network"],
    },
    {
        "name": "Physics Lab",
        "location": "Science Block, Room 110",
        "capacity": 25,
        "equipment": ["Oscilloscope", "Projector", "Air Conditioning"],
    },
]


def seed_labs(supabase: Client) -> int:
    """Insert or refresh every starter lab"""
    logger.info("Seeding labs...")
    created_count = 0
    updated_count = 0

    for lab in STARTER_LABS:
        try:
            existing = supabase.table("labs")\
                .select("id")\
                .eq("name", lab["name"])\
                .execute()

            if existing.data:
                supabase.table("labs")\
                    .update({
                        "location": lab["location"],
                        "capacity": lab["capacity"],
                        "equipment": lab["equipment"],
                    })\
                    .eq("name", lab["name"])\
                    .execute()
                updated_count += 1
                logger.debug(f"Updated lab: {lab['name']}")
            else:
                supabase.table("labs").insert({
                    **lab,
                    "status": "available",
                    "locked": False,
                }).execute()
                created_count += 1
                logger.debug(f"Created lab: {lab['name']}")
        except Exception as e:
            logger.error(f"Error processing lab {lab['name']}: {e}")

    logger.info(f"Labs seeded: {created_count} created, {updated_count} updated")
    return created_count + updated_count


def main():
    try:
        seed_labs(SupabaseClient.get_service_client())
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
