from pethub.models import Client


class TestClientsApi:
    def test_create_formats_phone(self, api, auth_headers):
        response = api.post(
            "/clients",
            json={"first_name": " Luis ", "last_name": "Ortiz", "phone": "7875550199", "email": ""},
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["first_name"] == "Luis"
        assert body["phone"] == "(787) 555-0199"
        assert body["email"] is None

    def test_create_rejects_bad_email(self, api, auth_headers):
        response = api.post(
            "/clients",
            json={"first_name": "Luis", "last_name": "Ortiz", "phone": "7875550199", "email": "luis@"},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid email format."

    def test_list_only_own_business(self, api, auth_headers, db_session, sample_client, other_business):
        db_session.add(Client(business_id=other_business.id, first_name="Eve", last_name="Other", phone="1"))
        db_session.commit()

        names = [c["first_name"] for c in api.get("/clients", headers=auth_headers).json()]
        assert names == ["Ana"]

    def test_other_business_client_is_not_found(self, api, auth_headers, db_session, other_business):
        stranger = Client(business_id=other_business.id, first_name="Eve", last_name="Other", phone="1")
        db_session.add(stranger)
        db_session.commit()

        assert api.get(f"/clients/{stranger.id}", headers=auth_headers).status_code == 404
        assert api.delete(f"/clients/{stranger.id}", headers=auth_headers).status_code == 404

    def test_update_validates_merged_record(self, api, auth_headers, sample_client):
        response = api.patch(f"/clients/{sample_client.id}", json={"last_name": "  "}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Last name is required."

        response = api.patch(f"/clients/{sample_client.id}", json={"phone": "787.555.0111"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["phone"] == "(787) 555-0111"
        assert response.json()["first_name"] == "Ana"

    def test_notes_are_cleaned(self, api, auth_headers, sample_client):
        response = api.patch(
            f"/clients/{sample_client.id}", json={"notes": "  Prefers mornings\x00  "}, headers=auth_headers
        )
        assert response.json()["notes"] == "Prefers mornings"

        response = api.patch(f"/clients/{sample_client.id}", json={"notes": "x" * 2001}, headers=auth_headers)
        assert response.status_code == 400

    def test_delete_keeps_pets_unassigned(self, api, auth_headers, sample_client, sample_pet):
        assert api.delete(f"/clients/{sample_client.id}", headers=auth_headers).json() == {"message": "Client deleted"}

        assert api.get(f"/clients/{sample_client.id}", headers=auth_headers).status_code == 404
        pet = api.get(f"/pets/{sample_pet.id}", headers=auth_headers).json()
        assert pet["client_id"] is None


class TestPetsApi:
    def test_create_pet(self, api, auth_headers, sample_client):
        response = api.post(
            "/pets",
            json={
                "client_id": sample_client.id,
                "name": "Max",
                "species": "cat",
                "birth_month": 1,
                "birth_year": 2019,
                "last_vaccination_date": "2020-01-01",
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Max"
        assert body["age"] is not None and body["age"] >= 6
        assert body["vaccination_status"] == "out_of_date"

    def test_explicit_vaccination_status_is_kept(self, api, auth_headers, sample_client):
        response = api.post(
            "/pets",
            json={
                "client_id": sample_client.id,
                "name": "Max",
                "vaccination_status": "unknown",
                "last_vaccination_date": "2020-01-01",
            },
            headers=auth_headers,
        )
        assert response.json()["vaccination_status"] == "unknown"

    def test_create_requires_known_client(self, api, auth_headers, random_uuid):
        response = api.post("/pets", json={"client_id": random_uuid, "name": "Max"}, headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Client not found"

    def test_create_rejects_invalid_species(self, api, auth_headers, sample_client):
        response = api.post(
            "/pets", json={"client_id": sample_client.id, "name": "Polly", "species": "bird"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Species must be dog, cat, or other."

    def test_pets_by_client(self, api, auth_headers, sample_client, sample_pet):
        pets = api.get(f"/clients/{sample_client.id}/pets", headers=auth_headers).json()
        assert [p["name"] for p in pets] == ["Coco"]
        assert pets[0]["age"] is not None

        assert api.get("/pets", params={"client_id": sample_client.id}, headers=auth_headers).json()[0]["id"] == sample_pet.id

    def test_update_and_delete(self, api, auth_headers, sample_pet):
        response = api.patch(f"/pets/{sample_pet.id}", json={"weight": 12.5}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["weight"] == 12.5

        response = api.patch(f"/pets/{sample_pet.id}", json={"birth_month": 13}, headers=auth_headers)
        assert response.status_code == 400

        assert api.delete(f"/pets/{sample_pet.id}", headers=auth_headers).status_code == 200
        assert api.get(f"/pets/{sample_pet.id}", headers=auth_headers).status_code == 404
