from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    # Allow running as: python scripts/seed_content.py
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from prep_cms.database import Base, SessionLocal, engine  # noqa: E402
from prep_cms.errors import FormValidationError  # noqa: E402
from prep_cms.models.content import new_id  # noqa: E402
from prep_cms.models.subject import Subject  # noqa: E402
from prep_cms.repositories.subjects import SubjectRepository  # noqa: E402
from prep_cms.repositories.subtopics import SubtopicRepository  # noqa: E402
from prep_cms.repositories.topics import TopicRepository  # noqa: E402
from prep_cms.schemas.subject import SubjectForm  # noqa: E402
from prep_cms.schemas.subtopic import SubtopicForm  # noqa: E402
from prep_cms.schemas.topic import TopicForm  # noqa: E402
from prep_cms.services.validation import validate_form  # noqa: E402


DEFAULT_CONTENT = {
    "Data Structures": {
        "description": "Core containers and their trade-offs",
        "topics": {
            "Arrays": ["Two pointers", "Sliding window"],
            "Trees": ["Binary search trees", "Tree traversal"],
            "Hash tables": ["Collision handling"],
        },
    },
    "Algorithms": {
        "description": "Problem-solving techniques",
        "topics": {
            "Sorting": ["Merge sort", "Quick sort"],
            "Graphs": ["Breadth-first search", "Topological sort"],
        },
    },
    "JavaScript": {
        "description": "Language fundamentals for front-end interviews",
        "topics": {
            "Closures": ["Lexical scope"],
            "Event loop": ["Microtasks and macrotasks"],
        },
    },
}


def _load_dataset(path: Path | None) -> dict:
    if path is None:
        return DEFAULT_CONTENT
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError("dataset must be a JSON object keyed by subject name")
    return raw


def _dataset_errors(data: dict) -> list[str]:
    """Check every entry before the first write; repositories commit row by row."""
    placeholder_id = new_id()
    errors: list[str] = []

    def _check(schema, payload: dict, where: str) -> None:
        try:
            validate_form(schema, payload)
        except FormValidationError as exc:
            errors.append(f"invalid entry {where}: {exc.field_errors}")

    for subject_name, entry in data.items():
        if not isinstance(entry, dict):
            errors.append(f"invalid entry {subject_name!r}: expected an object with description and topics")
            continue
        _check(SubjectForm, {"name": subject_name, "description": entry.get("description")}, repr(subject_name))
        for topic_name, subtopic_names in (entry.get("topics") or {}).items():
            where = f"{subject_name!r} > {topic_name!r}"
            _check(TopicForm, {"name": topic_name, "subject_id": placeholder_id}, where)
            for subtopic_name in subtopic_names or []:
                _check(SubtopicForm, {"name": subtopic_name, "topic_id": placeholder_id}, f"{where} > {subtopic_name!r}")
    return errors


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed subjects, topics and subtopics.")
    parser.add_argument("--dataset", default=None, help="Optional JSON file shaped like DEFAULT_CONTENT")
    parser.add_argument("--skip-existing", action="store_true", help="Skip subjects whose name already exists")
    args = parser.parse_args(argv)

    Base.metadata.create_all(bind=engine)
    data = _load_dataset(Path(args.dataset) if args.dataset else None)
    errors = _dataset_errors(data)
    if errors:
        for line in errors:
            print(line)
        return 1

    created = 0
    with SessionLocal() as db:
        subjects = SubjectRepository(db)
        topics = TopicRepository(db)
        subtopics = SubtopicRepository(db)

        for subject_name, entry in data.items():
            if args.skip_existing and db.query(Subject).filter(Subject.name == subject_name).first():
                print("skip existing subject:", subject_name)
                continue
            subject = subjects.create({"name": subject_name, "description": entry.get("description")})
            created += 1
            for topic_name, subtopic_names in (entry.get("topics") or {}).items():
                topic = topics.create({"name": topic_name, "subject_id": subject.id})
                created += 1
                for subtopic_name in subtopic_names or []:
                    subtopics.create({"name": subtopic_name, "topic_id": topic.id})
                    created += 1

    print("created rows:", created)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
