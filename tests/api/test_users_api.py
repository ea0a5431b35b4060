from conftest import auth_headers


def test_public_profile_by_username(client, make_user):
    viewer, target = make_user("viewer"), make_user("target")

    response = client.get("/api/v1/users/target", headers=auth_headers(viewer))

    assert response.status_code == 200
    assert response.json()["id"] == target.id
    assert response.json()["reputation"] == 0


def test_unknown_username_is_404(client, make_user):
    viewer = make_user("viewer")

    response = client.get("/api/v1/users/nobody", headers=auth_headers(viewer))

    assert response.status_code == 404
    assert response.json()["code"] == "not_found"
