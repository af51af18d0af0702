from __future__ import annotations


def _tree(client, **params) -> list[dict]:
    r = client.get("/api/navigation", params=params)
    assert r.status_code == 200
    return r.json()["subjects"]


def test_navigation_builds_ordered_tree(client, make_subject, make_topic, make_subtopic) -> None:
    algorithms = make_subject("Algorithms")
    make_subject("Data Structures")
    sorting = make_topic(algorithms["id"], "Sorting")
    make_topic(algorithms["id"], "Graphs")
    make_subtopic(sorting["id"], "Quick sort")
    make_subtopic(sorting["id"], "Merge sort")

    tree = _tree(client)
    assert [s["name"] for s in tree] == ["Algorithms", "Data Structures"]
    assert [t["name"] for t in tree[0]["topics"]] == ["Graphs", "Sorting"]
    assert [st["name"] for st in tree[0]["topics"][1]["subtopics"]] == ["Merge sort", "Quick sort"]
    assert tree[1]["topics"] == []


def test_navigation_hides_deleted_and_shelved_branches(
    client, make_subject, make_topic, make_subtopic
) -> None:
    visible = make_subject("Algorithms")
    shelved = make_subject("Drafts", is_shelved=True)
    deleted = make_subject("Gone")
    make_topic(shelved["id"], "Draft topic")
    sorting = make_topic(visible["id"], "Sorting")
    make_topic(visible["id"], "Hidden topic", is_shelved=True)
    removed = make_subtopic(sorting["id"], "Bubble sort")
    make_subtopic(sorting["id"], "Merge sort")
    client.delete(f"/api/subjects/{deleted['id']}")
    client.delete(f"/api/subtopics/{removed['id']}")

    tree = _tree(client)
    assert [s["name"] for s in tree] == ["Algorithms"]
    assert [t["name"] for t in tree[0]["topics"]] == ["Sorting"]
    assert [st["name"] for st in tree[0]["topics"][0]["subtopics"]] == ["Merge sort"]

    tree = _tree(client, include_shelved=True)
    by_name = {s["name"]: s for s in tree}
    assert set(by_name) == {"Algorithms", "Drafts"}
    assert by_name["Drafts"]["is_shelved"] is True
    assert [t["name"] for t in by_name["Drafts"]["topics"]] == ["Draft topic"]
    assert {t["name"] for t in by_name["Algorithms"]["topics"]} == {"Sorting", "Hidden topic"}


def test_navigation_on_empty_database(client, sql_log) -> None:
    sql_log.clear()

    assert _tree(client) == []
    # Only the subject query runs when there is nothing below it.
    assert len([s for s in sql_log if s.startswith("select")]) == 1
