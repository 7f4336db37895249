import logging
import os
from datetime import datetime

import pandas as pd

# Submission history shown in the admin dashboard
LOG_FILE = "submissions_log.csv"
LOG_COLUMNS = ["Timestamp", "Order", "Form", "Delivery Email", "Status", "Message"]

_configured = False


def get_logger(origin):
    """
    Diagnostic logger for one part of the app, e.g. get_logger("dispatcher").
    """
    global _configured
    if not _configured:
        logging.basicConfig(
            level=os.environ.get("INTAKE_LOG_LEVEL", "INFO"),
            format="[%(asctime)s] [%(name)s] %(levelname)s %(message)s",
        )
        _configured = True
    return logging.getLogger(f"intake.{origin}")


def log_submission(order_number, form_type, delivery_email, status, message="", log_file=LOG_FILE):
    """
    Saves a new entry to the log file.
    """
    new_entry = {
        "Timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "Order": order_number,
        "Form": form_type,
        "Delivery Email": delivery_email,
        "Status": status,
        "Message": message,
    }

    file_exists = os.path.isfile(log_file)

    df = pd.DataFrame([new_entry], columns=LOG_COLUMNS)
    df.to_csv(log_file, mode="a", header=not file_exists, index=False)


def load_logs(log_file=LOG_FILE):
    """
    Reads the log file for the Dashboard.
    """
    if not os.path.exists(log_file):
        return pd.DataFrame(columns=LOG_COLUMNS)
    try:
        return pd.read_csv(log_file, dtype=str)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        get_logger("logger").warning("Could not read %s: %s", log_file, e)
        return pd.DataFrame(columns=LOG_COLUMNS)
