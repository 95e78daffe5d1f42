# seed_alerts.py
from substation_backend.alerts import replace_alerts
from substation_backend.database import resolve_db_path
from substation_backend.seed_data import demo_alerts

try:
    count = replace_alerts(demo_alerts())
    print(f" Seeded {count} alerts into {resolve_db_path()}")
except Exception as e:
    print(f"Error seeding database: {str(e)}")
    raise
