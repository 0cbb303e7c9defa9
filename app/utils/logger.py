
import os
import sys
import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s {%(module)s:%(lineno)d} - %(message)s"
LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "logs"))
LOG_FILE = os.path.join(LOG_DIR, "absorbey.log")

os.makedirs(LOG_DIR, exist_ok=True)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format=LOG_FORMAT,
    handlers=[
        logging.FileHandler(LOG_FILE, encoding="utf-8"),
        logging.StreamHandler(sys.stdout)
    ]
)

# Third-party clients log every request at INFO
for noisy in ("httpx", "urllib3", "anthropic"):
    logging.getLogger(noisy).setLevel(logging.WARNING)

logging = logging.getLogger('absorbey')
