import copy
import json
import logging
import os
import tempfile
import threading
import time
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from database.default_jobs import JOBS_DEFAULT
from models.job import JobPosting

log = logging.getLogger(__name__)

DATA_FILE = os.getenv('DATA_FILE', os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data.json'))

# one lock per process; the data file is the only shared mutable state
_lock = threading.RLock()


class DuplicateEmailError(Exception):
    pass


def _empty_db() -> Dict[str, Any]:
    return {'users': [], 'jobs': copy.deepcopy(JOBS_DEFAULT)}


class DBManager:
    """JSON-file store holding users and the job catalog."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or DATA_FILE

    def ensure_data_file(self):
        with _lock:
            if os.path.exists(self.path):
                return
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            self.write(_empty_db())
            log.info("Seeded data file with default catalog at %s", self.path)

    def read(self) -> Dict[str, Any]:
        with _lock:
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                log.warning("Data file %s unreadable (%s); using defaults", self.path, e)
                return _empty_db()
        if not isinstance(data, dict):
            return _empty_db()
        data.setdefault('users', [])
        return data

    def write(self, data: Dict[str, Any]):
        directory = os.path.dirname(os.path.abspath(self.path))
        with _lock:
            fd, tmp = tempfile.mkstemp(dir=directory, prefix='.data-', suffix='.json')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.remove(tmp)
                raise

    # Users
    def create_user(self, name: str, email: str, password_hash: str) -> Dict[str, Any]:
        """Insert a user; raises DuplicateEmailError if the email (any case) is taken."""
        with _lock:
            db = self.read()
            needle = str(email).lower()
            if any(str(u.get('email', '')).lower() == needle for u in db['users']):
                raise DuplicateEmailError(email)
            user = {
                'id': str(int(time.time() * 1000)),
                'name': name,
                'email': email,
                'hash': password_hash,
                'createdAt': datetime.now(timezone.utc).isoformat(),
            }
            # epoch-millisecond ids can collide within one millisecond
            taken = {u.get('id') for u in db['users']}
            while user['id'] in taken:
                user['id'] = str(int(user['id']) + 1)
            db['users'].append(user)
            self.write(db)
        return user

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        needle = str(email).lower()
        for user in self.read()['users']:
            if str(user.get('email', '')).lower() == needle:
                return user
        return None

    def get_user_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        for user in self.read()['users']:
            if user.get('id') == user_id:
                return user
        return None

    # Jobs
    def list_job_records(self) -> List[Dict[str, Any]]:
        jobs = self.read().get('jobs')
        if jobs is None:
            return copy.deepcopy(JOBS_DEFAULT)
        return jobs

    def list_jobs(self) -> List[JobPosting]:
        """Catalog snapshot as JobPosting values; raises MalformedJobError on a bad record."""
        return [JobPosting.from_dict(record) for record in self.list_job_records()]

    def get_job(self, job_id: Optional[int]) -> Optional[JobPosting]:
        """Job with this id, else the first catalog job (None for an empty catalog)."""
        jobs = self.list_jobs()
        if not jobs:
            return None
        for job in jobs:
            if job.id == job_id:
                return job
        return jobs[0]
