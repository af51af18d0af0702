from __future__ import annotations


def test_create_subject_applies_defaults_and_flags_list_as_stale(client) -> None:
    r = client.post("/api/subjects", json={"name": "Data Structures", "description": "Lists and trees"})
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["name"] == "Data Structures"
    assert data["description"] == "Lists and trees"
    assert data["is_active"] is True
    assert data["is_shelved"] is False
    assert data["is_deleted"] is False
    assert data["id"]
    assert data["created_at"] and data["modified_at"]
    assert r.headers["X-Revalidate-Paths"] == "/admin/subjects"


def test_subject_name_of_one_character_is_rejected(client) -> None:
    r = client.post("/api/subjects", json={"name": "A"})
    assert r.status_code == 422
    errors = r.json()["error"]
    assert "name" in errors
    assert errors["name"] == ["Name must be at least 2 characters."]

    # Nothing was written.
    assert client.get("/api/subjects").json()["count"] == 0


def test_subject_name_of_two_characters_is_accepted(client) -> None:
    r = client.post("/api/subjects", json={"name": "Go"})
    assert r.status_code == 201


def test_subject_rejects_unknown_fields_and_long_description(client) -> None:
    r = client.post(
        "/api/subjects",
        json={"name": "Algorithms", "description": "x" * 501, "is_deleted": True},
    )
    assert r.status_code == 422
    errors = r.json()["error"]
    assert set(errors) == {"description", "is_deleted"}


def test_search_matches_name_or_description_case_insensitively(client, make_subject) -> None:
    make_subject("Data Structures")
    make_subject("Algorithms", description="Sorting and searching")
    make_subject("JavaScript")

    r = client.get("/api/subjects", params={"search": "data"})
    assert r.status_code == 200
    assert [row["name"] for row in r.json()["data"]] == ["Data Structures"]

    r = client.get("/api/subjects", params={"search": "SORTING"})
    assert [row["name"] for row in r.json()["data"]] == ["Algorithms"]


def test_search_treats_like_wildcards_literally(client, make_subject) -> None:
    make_subject("snake_case")
    make_subject("snakescase")

    r = client.get("/api/subjects", params={"search": "e_c"})
    assert [row["name"] for row in r.json()["data"]] == ["snake_case"]


def test_pagination_counts_and_ordering(client, make_subject) -> None:
    for i in range(25):
        make_subject(f"Subject {i:02d}")

    first = client.get("/api/subjects", params={"page": 1, "page_size": 10}).json()
    assert first["count"] == 25
    assert first["page_count"] == 3
    assert len(first["data"]) == 10
    # Most recent first.
    assert first["data"][0]["name"] == "Subject 24"

    last = client.get("/api/subjects", params={"page": 3, "page_size": 10}).json()
    assert len(last["data"]) == 5
    assert last["data"][-1]["name"] == "Subject 00"


def test_empty_listing_has_zero_pages(client) -> None:
    body = client.get("/api/subjects").json()
    assert body["count"] == 0
    assert body["page_count"] == 0
    assert body["data"] == []


def test_invalid_page_is_rejected(client) -> None:
    r = client.get("/api/subjects", params={"page": 0})
    assert r.status_code == 422


def test_shelved_subjects_hidden_unless_requested(client, make_subject) -> None:
    make_subject("Visible")
    make_subject("Hidden", is_shelved=True)

    default = client.get("/api/subjects").json()
    assert [row["name"] for row in default["data"]] == ["Visible"]

    everything = client.get("/api/subjects", params={"show_shelved": True}).json()
    assert {row["name"] for row in everything["data"]} == {"Visible", "Hidden"}


def test_toggle_shelved_round_trip_keeps_other_flags(client, make_subject) -> None:
    subject = make_subject("Databases", is_active=False)

    r = client.patch(f"/api/subjects/{subject['id']}/shelved", json={"is_shelved": True})
    assert r.status_code == 200
    shelved = r.json()["data"]
    assert shelved["is_shelved"] is True
    assert shelved["is_active"] is False
    assert shelved["is_deleted"] is False

    r = client.patch(f"/api/subjects/{subject['id']}/shelved", json={"is_shelved": False})
    restored = r.json()["data"]
    assert restored["is_shelved"] is False
    assert restored["is_active"] is False
    assert restored["is_deleted"] is False


def test_toggle_shelved_with_current_value_is_a_no_op(client, make_subject) -> None:
    subject = make_subject("Networking")

    r = client.patch(f"/api/subjects/{subject['id']}/shelved", json={"is_shelved": False})
    assert r.status_code == 200
    assert r.json()["data"]["modified_at"] == subject["modified_at"]
    assert "X-Revalidate-Paths" not in r.headers


def test_soft_delete_hides_subject_everywhere(client, make_subject) -> None:
    subject = make_subject("Operating Systems")
    make_subject("Compilers")

    r = client.delete(f"/api/subjects/{subject['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    names = [row["name"] for row in client.get("/api/subjects", params={"show_shelved": True}).json()["data"]]
    assert names == ["Compilers"]

    r = client.get(f"/api/subjects/{subject['id']}")
    assert r.status_code == 404
    assert r.json() == {"error": "Subject not found"}

    # Deleting again is still a success.
    assert client.delete(f"/api/subjects/{subject['id']}").status_code == 200


def test_mutations_on_soft_deleted_subject_are_not_found(client, make_subject) -> None:
    subject = make_subject("Security")
    client.delete(f"/api/subjects/{subject['id']}")

    assert client.patch(f"/api/subjects/{subject['id']}", json={"name": "Security 2"}).status_code == 404
    assert client.patch(f"/api/subjects/{subject['id']}/shelved", json={"is_shelved": True}).status_code == 404


def test_partial_update_keeps_omitted_fields_and_touches_modified_at(client, make_subject) -> None:
    subject = make_subject("Cloud", description="AWS and GCP")

    r = client.patch(f"/api/subjects/{subject['id']}", json={"is_active": False})
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["name"] == "Cloud"
    assert updated["description"] == "AWS and GCP"
    assert updated["is_active"] is False
    assert updated["created_at"] == subject["created_at"]
    assert updated["modified_at"] != subject["modified_at"]
    assert r.headers["X-Revalidate-Paths"] == f"/admin/subjects,/admin/subjects/{subject['id']}"


def test_update_validates_merged_payload(client, make_subject) -> None:
    subject = make_subject("Cloud")

    r = client.patch(f"/api/subjects/{subject['id']}", json={"name": " "})
    assert r.status_code == 422
    assert "name" in r.json()["error"]

    assert client.get(f"/api/subjects/{subject['id']}").json()["name"] == "Cloud"


def test_subject_detail_enriches_topics_and_counts(client, make_subject, make_topic, make_subtopic) -> None:
    subject = make_subject("Data Structures")
    trees = make_topic(subject["id"], "Trees")
    arrays = make_topic(subject["id"], "Arrays", is_shelved=True)
    gone = make_topic(subject["id"], "Gone")
    make_subtopic(trees["id"], "Traversal")
    make_subtopic(trees["id"], "Balancing")
    deleted_sub = make_subtopic(trees["id"], "Deleted one")
    make_subtopic(gone["id"], "Orphan")

    client.delete(f"/api/subtopics/{deleted_sub['id']}")
    client.delete(f"/api/topics/{gone['id']}")

    r = client.get(f"/api/subjects/{subject['id']}")
    assert r.status_code == 200
    body = r.json()
    assert body["topic_count"] == 2
    assert body["subtopic_count"] == 2

    topics = {t["name"]: t for t in body["topics"]}
    assert set(topics) == {"Trees", "Arrays"}
    assert topics["Trees"]["subtopics_count"] == 2
    assert topics["Arrays"]["subtopics_count"] == 0
    assert topics["Arrays"]["is_shelved"] is True
    assert topics["Trees"]["id"] == trees["id"]
    assert topics["Arrays"]["id"] == arrays["id"]


def test_subject_list_rows_carry_live_topic_count(client, make_subject, make_topic) -> None:
    subject = make_subject("Algorithms")
    make_subject("Empty")
    make_topic(subject["id"], "Sorting")
    doomed = make_topic(subject["id"], "Graphs")
    client.delete(f"/api/topics/{doomed['id']}")

    rows = {row["name"]: row for row in client.get("/api/subjects").json()["data"]}
    assert rows["Algorithms"]["topic_count"] == 1
    assert rows["Empty"]["topic_count"] == 0


def test_subject_counts_endpoint(client, make_subject, make_topic, make_subtopic) -> None:
    subject = make_subject("Algorithms")
    sorting = make_topic(subject["id"], "Sorting")
    make_subtopic(sorting["id"], "Merge sort")
    make_subtopic(sorting["id"], "Quick sort")

    r = client.get(f"/api/subjects/{subject['id']}/counts")
    assert r.status_code == 200
    assert r.json() == {"topic_count": 1, "subtopic_count": 2}


def test_subject_options_filter_active(client, make_subject) -> None:
    make_subject("Beta")
    make_subject("Alpha")
    make_subject("Inactive", is_active=False)
    deleted = make_subject("Deleted")
    client.delete(f"/api/subjects/{deleted['id']}")

    names = [o["name"] for o in client.get("/api/subjects/options").json()]
    assert names == ["Alpha", "Beta", "Inactive"]

    active = [o["name"] for o in client.get("/api/subjects/options", params={"active_only": True}).json()]
    assert active == ["Alpha", "Beta"]
