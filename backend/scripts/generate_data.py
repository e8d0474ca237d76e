#!/usr/bin/env python3
"""Generate several days of hive readings with a hot afternoon baked in."""

import asyncio
import math
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from hive_monitor.database import async_session
from hive_monitor.models import Reading
from hive_monitor.models.readings import utc_now

# Fixed seed for reproducibility
RANDOM_SEED = 42

# Time configuration
DAYS_TO_GENERATE = 10
INTERVAL_MINUTES = 30

# Hive baselines
BASE_WEIGHT = 32000.0  # grams
BASE_TEMPERATURE = 34.5  # brood nest °C
BASE_HUMIDITY = 62.0
BASE_AUDIO = 900


def generate_readings(start_time: datetime, end_time: datetime) -> list[Reading]:
    """Generate one reading per interval between start and end."""
    readings = []
    current_time = start_time
    weight = BASE_WEIGHT

    # Heat wave: the last afternoon runs hot and loud
    incident_start = end_time.replace(hour=13, minute=0) - timedelta(days=1)
    incident_end = incident_start + timedelta(hours=4)

    while current_time <= end_time:
        # Daily cycle: foragers leave in the morning and return loaded
        hour_angle = (current_time.hour + current_time.minute / 60) / 24 * 2 * math.pi
        weight += random.uniform(-15, 25) - 40 * math.sin(hour_angle)

        temperature = BASE_TEMPERATURE + 0.8 * math.sin(hour_angle) + random.uniform(-0.3, 0.3)
        humidity = BASE_HUMIDITY + random.uniform(-4, 4)
        audio = BASE_AUDIO + random.randint(-150, 150)

        if incident_start <= current_time <= incident_end:
            temperature += 4.0
            audio += 1800

        readings.append(
            Reading(
                timestamp=current_time,
                weight=round(weight, 2),
                temperature=round(temperature, 1),
                humidity=round(humidity, 1),
                audio=audio,
            )
        )
        current_time += timedelta(minutes=INTERVAL_MINUTES)

    return readings


async def generate_all_data() -> None:
    """Generate DAYS_TO_GENERATE days of hive readings."""
    random.seed(RANDOM_SEED)

    end_time = utc_now().replace(second=0, microsecond=0)
    start_time = end_time - timedelta(days=DAYS_TO_GENERATE)

    print(f"Generating data from {start_time} to {end_time}")

    async with async_session() as session:
        result = await session.execute(select(Reading).limit(1))
        if result.scalar_one_or_none():
            print("Data already exists. Run with --reset to regenerate.")
            return

        readings = generate_readings(start_time, end_time)
        session.add_all(readings)
        await session.commit()
        print(f"Generated {len(readings)} readings.")


async def clear_readings() -> None:
    """Clear all reading data."""
    async with async_session() as session:
        await session.execute(Reading.__table__.delete())
        await session.commit()
    print("Cleared all readings.")


async def reset_and_generate() -> None:
    """Clear existing data and regenerate."""
    await clear_readings()
    await generate_all_data()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "--reset":
        asyncio.run(reset_and_generate())
    else:
        asyncio.run(generate_all_data())
