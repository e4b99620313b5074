def test_registry_crud(client, admin_headers):
    created = client.post("/api/registry/subjects", json={"subject": " Math "}, headers=admin_headers)
    assert created.status_code == 201
    assert created.json() == [{"subject": "Math", "teachers": []}]

    duplicate = client.post("/api/registry/subjects", json={"subject": "MATH"}, headers=admin_headers)
    assert duplicate.status_code == 409

    client.post("/api/registry/subjects", json={"subject": "Art"}, headers=admin_headers)
    client.post("/api/registry/subjects/math/teachers", json={"teacherName": "Carla"}, headers=admin_headers)
    response = client.post("/api/registry/subjects/Math/teachers", json={"teacherName": "Ana"}, headers=admin_headers)
    assert response.json() == [
        {"subject": "Art", "teachers": []},
        {"subject": "Math", "teachers": ["Ana", "Carla"]},
    ]

    again = client.post("/api/registry/subjects/Math/teachers", json={"teacherName": "Ana"}, headers=admin_headers)
    assert again.status_code == 409

    removed = client.delete("/api/registry/subjects/Math/teachers/Ana", headers=admin_headers)
    assert removed.json()[1] == {"subject": "Math", "teachers": ["Carla"]}

    gone = client.delete("/api/registry/subjects/Math", headers=admin_headers)
    assert gone.json() == [{"subject": "Art", "teachers": []}]
    assert client.get("/api/registry").json() == [{"subject": "Art", "teachers": []}]


def test_registry_unknown_subject(client, admin_headers):
    response = client.post("/api/registry/subjects/History/teachers", json={"teacherName": "Ana"}, headers=admin_headers)
    assert response.status_code == 404
    assert client.delete("/api/registry/subjects/History", headers=admin_headers).status_code == 404


def test_teacher_suggestions(client, admin_headers):
    client.post("/api/registry/subjects", json={"subject": "Math"}, headers=admin_headers)
    client.post("/api/registry/subjects", json={"subject": "Art"}, headers=admin_headers)
    client.post("/api/registry/subjects/Math/teachers", json={"teacherName": "Bia"}, headers=admin_headers)
    client.post("/api/registry/subjects/Art/teachers", json={"teacherName": "Ana"}, headers=admin_headers)

    assert client.get("/api/registry/teachers", params={"subject": "math"}).json() == ["Bia"]
    assert client.get("/api/registry/teachers", params={"subject": "PE"}).json() == ["Ana", "Bia"]
    assert client.get("/api/registry/teachers").json() == ["Ana", "Bia"]
