from datetime import datetime

from eventfeed.pipeline.io import trim_log_by_time


class RunLog:
    """Print messages and keep timestamped copies for the log file."""

    def __init__(self):
        self.lines = []

    def __call__(self, message, level="INFO"):
        timestamp = datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")
        print(message)
        self.lines.append(f"[{timestamp}] [{level}] {message}")

    def save(self, log_path, retention_days=14):
        """Append this run to the log file, dropping entries past retention."""
        existing = trim_log_by_time(log_path, retention_days=retention_days)
        content = existing + ["\n--- New Run ---\n"] + [line + "\n" for line in self.lines]
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(log_path, "w") as f:
            f.writelines(content)
