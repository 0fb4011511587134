import os


ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_DIR = os.path.join(ROOT_DIR, "palm_config")
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")
DATABASE_FILE = os.path.join(CONFIG_DIR, "palm.sqlite")
FIXTURES_FILE = os.path.join(ROOT_DIR, "scripts", "fixtures", "emails.json")
