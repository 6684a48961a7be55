"""CLI script to load local job postings into the backend DB.
Usage: python scripts/seed_jobs.py --file jobs.json

The file holds a JSON array of objects with `title`, `company`,
`location`, `salary` and `description`, plus optional `job_type` (or
`type`) and `posted_date`.
"""
import sys
import argparse
import json
import pathlib
# Ensure `backend/` is on sys.path so `careerhub` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from sqlmodel import Session
from careerhub.database import engine, create_db_and_tables
from careerhub import models, repositories

REQUIRED = ('title', 'company', 'location', 'salary', 'description')


def parse_jobs(records):
    """Turn raw JSON records into `Job` rows, rejecting incomplete ones."""
    if not isinstance(records, list):
        raise ValueError('expected a JSON array of job objects')
    jobs = []
    for i, rec in enumerate(records):
        missing = [k for k in REQUIRED if rec.get(k) in (None, '')]
        if missing:
            raise ValueError(f"job #{i} is missing {', '.join(missing)}")
        job = models.Job(
            title=rec['title'],
            company=rec['company'],
            location=rec['location'],
            salary=int(rec['salary']),
            description=rec['description'],
            job_type=rec.get('job_type') or rec.get('type') or 'Full-time',
        )
        if rec.get('posted_date'):
            job.posted_date = str(rec['posted_date'])
        jobs.append(job)
    return jobs


def load_jobs(path: pathlib.Path, session: Session) -> int:
    records = json.loads(pathlib.Path(path).read_text(encoding='utf-8'))
    return repositories.JobRepository(session).create_many(parse_jobs(records))


def main(path: pathlib.Path) -> int:
    if not path.exists():
        print(f'Jobs file not found at {path}')
        return 1
    create_db_and_tables()
    with Session(engine) as session:
        try:
            created = load_jobs(path, session)
        except ValueError as e:
            print(f'Could not load jobs: {e}')
            return 1
    print(f'Loaded {created} jobs from {path}')
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Seed the local job store from a JSON file')
    parser.add_argument('--file', type=pathlib.Path, required=True, help='path to a JSON array of jobs')
    args = parser.parse_args()
    sys.exit(main(args.file))
