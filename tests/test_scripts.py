from __future__ import annotations

import json

from scripts import create_tables, seed_content


def test_create_tables_requires_safety_flag(capsys) -> None:
    assert create_tables.main([]) == 2
    assert "--i-understand" in capsys.readouterr().out


def test_seed_default_content(client) -> None:
    assert seed_content.main([]) == 0

    tree = client.get("/api/navigation").json()["subjects"]
    assert [s["name"] for s in tree] == ["Algorithms", "Data Structures", "JavaScript"]
    algorithms = tree[0]
    assert [t["name"] for t in algorithms["topics"]] == ["Graphs", "Sorting"]

    # Second run with --skip-existing adds nothing.
    assert seed_content.main(["--skip-existing"]) == 0
    assert client.get("/api/subjects").json()["count"] == 3


def test_seed_rejects_invalid_dataset(client, tmp_path) -> None:
    dataset = tmp_path / "content.json"
    dataset.write_text(json.dumps({"X": {"topics": {}}}), encoding="utf-8")

    assert seed_content.main(["--dataset", str(dataset)]) == 1
    assert client.get("/api/subjects").json()["count"] == 0


def test_seed_checks_whole_dataset_before_writing(client, tmp_path, capsys) -> None:
    dataset = tmp_path / "content.json"
    dataset.write_text(
        json.dumps(
            {
                "Algorithms": {"topics": {"Sorting": ["Merge sort"]}},
                "Databases": {"topics": {"Indexes": ["B"]}},
            }
        ),
        encoding="utf-8",
    )

    assert seed_content.main(["--dataset", str(dataset)]) == 1
    assert "'Databases' > 'Indexes' > 'B'" in capsys.readouterr().out

    # The valid subject ahead of the bad subtopic was not written either.
    assert client.get("/api/subjects").json()["count"] == 0
    assert client.get("/api/topics").json()["count"] == 0
