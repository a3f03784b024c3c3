"""HTTP tests for the recipe, dictionary and cooking endpoints."""

from conftest import recipe_payload


def _create(client, **kwargs) -> dict:
    res = client.post("/recipes", json=recipe_payload(**kwargs))
    assert res.status_code == 201, res.text
    return res.json()


def test_health(client):
    assert client.get("/").json()["status"] == "healthy"
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["database"] == "ok"


class TestRecipesApi:
    def test_create_returns_detail(self, client):
        body = _create(
            client,
            name="Shakshuka",
            ingredients=["  eggs", "TOMATO"],
            tags=["Brunch"],
            servings=2,
            source_url="https://example.com/shakshuka",
        )

        assert body["name"] == "Shakshuka"
        assert body["servings"] == 2
        assert body["source_url"] == "https://example.com/shakshuka"
        assert [(i["name"], i["sort_order"]) for i in body["ingredients"]] == [
            ("Eggs", 0), ("Tomato", 1)
        ]
        assert [t["name"] for t in body["tags"]] == ["brunch"]

    def test_create_validation_errors(self, client):
        assert client.post("/recipes", json=recipe_payload(ingredients=[])).status_code == 422
        assert client.post("/recipes", json=recipe_payload(name="")).status_code == 422
        assert client.post("/recipes", json=recipe_payload(name="x" * 256)).status_code == 422
        assert client.post("/recipes", json=recipe_payload(servings=0)).status_code == 422
        assert client.post("/recipes", json=recipe_payload(source_url="not a url")).status_code == 422
        assert client.post("/recipes", json=recipe_payload(tags=["  "])).status_code == 422

        payload = recipe_payload()
        payload["ingredients"] = [{"ingredient_name": "salt", "quantity": -1}]
        assert client.post("/recipes", json=payload).status_code == 422

        assert client.get("/recipes").json() == []

    def test_get_and_404(self, client):
        created = _create(client)
        res = client.get(f"/recipes/{created['recipe_id']}")
        assert res.status_code == 200
        assert res.json()["instructions"] == "1. Chop\n2. Simmer"

        assert client.get("/recipes/missing").status_code == 404

    def test_list_filters(self, client):
        _create(client, name="Chili", tags=["x"])
        _create(client, name="Salad", tags=["y"])
        _create(client, name="Curry", tags=["x"])

        names = [r["name"] for r in client.get("/recipes", params={"tags": "x"}).json()]
        assert names == ["Curry", "Chili"]

        names = [r["name"] for r in client.get("/recipes?tags=x,y").json()]
        assert names == ["Curry", "Salad", "Chili"]

        names = [r["name"] for r in client.get("/recipes?tags=x,y&search=a").json()]
        assert names == ["Salad"]

        assert client.get("/recipes?ingredient_ids=not-a-uuid").status_code == 422

    def test_list_by_ingredient(self, client):
        _create(client, name="Omelette", ingredients=["egg"])
        _create(client, name="Toast", ingredients=["bread"])
        egg = next(i for i in client.get("/ingredients").json() if i["name"] == "Egg")

        res = client.get("/recipes", params={"ingredient_ids": egg["ingredient_id"]})
        assert [r["name"] for r in res.json()] == ["Omelette"]

    def test_patch_partial_update(self, client):
        created = _create(client, ingredients=["tomato", "basil"], tags=["soup"])
        rid = created["recipe_id"]

        res = client.patch(f"/recipes/{rid}", json={"name": "Tomato Bisque", "notes": None})
        assert res.status_code == 200
        body = res.json()
        assert body["name"] == "Tomato Bisque"
        assert [i["name"] for i in body["ingredients"]] == ["Tomato", "Basil"]
        assert [t["name"] for t in body["tags"]] == ["soup"]

        res = client.patch(
            f"/recipes/{rid}",
            json={"ingredients": [{"ingredient_name": "cream", "quantity": 0.5, "unit": "cup"}], "tags": []},
        )
        body = res.json()
        assert [(i["name"], i["quantity"], i["unit"]) for i in body["ingredients"]] == [("Cream", 0.5, "cup")]
        assert body["tags"] == []

    def test_patch_rejects_nulling_required_fields(self, client):
        rid = _create(client)["recipe_id"]
        assert client.patch(f"/recipes/{rid}", json={"name": None}).status_code == 422
        assert client.patch(f"/recipes/{rid}", json={"ingredients": []}).status_code == 422

    def test_patch_missing_is_404(self, client):
        assert client.patch("/recipes/missing", json={"name": "x"}).status_code == 404

    def test_delete(self, client):
        rid = _create(client)["recipe_id"]

        assert client.delete(f"/recipes/{rid}").status_code == 204
        assert client.get(f"/recipes/{rid}").status_code == 404
        assert client.delete(f"/recipes/{rid}").status_code == 404
        # Shared dictionary entries remain
        assert [i["name"] for i in client.get("/ingredients").json()] == ["Tomato"]

    def test_cleanup(self, client):
        _create(client, name="Cleanup Test 1")
        _create(client, name="cleanup test 2")
        _create(client, name="Keeper")

        res = client.post("/recipes/cleanup", json={"pattern": "Te"})
        assert res.status_code == 400
        assert len(client.get("/recipes").json()) == 3

        res = client.post("/recipes/cleanup", json={"pattern": "Cleanup Test"})
        assert res.json() == {"deleted": 2}
        assert [r["name"] for r in client.get("/recipes").json()] == ["Keeper"]

    def test_steps(self, client):
        rid = _create(client)["recipe_id"]
        res = client.get(f"/recipes/{rid}/steps")
        assert res.json() == {"recipe_id": rid, "total_steps": 2, "steps": ["Chop", "Simmer"]}


class TestDictionariesApi:
    def test_tags_and_ingredients_sorted(self, client):
        _create(client, ingredients=["thyme", "Apple"], tags=["Vegan", "brunch"])

        assert [t["name"] for t in client.get("/tags").json()] == ["brunch", "vegan"]
        assert [i["name"] for i in client.get("/ingredients").json()] == ["Apple", "Thyme"]

    def test_units(self, client, dictionary):
        dictionary.seed_default_units()
        units = client.get("/units").json()
        assert units[0]["category"] == "count"
        assert {"name": "tablespoon", "abbreviation": "tbsp", "category": "volume"}.items() <= next(
            u for u in units if u["name"] == "tablespoon"
        ).items()


class TestCookingApi:
    def test_session_flow(self, client):
        rid = _create(client, name="Bread")["recipe_id"]
        client.patch(f"/recipes/{rid}", json={"instructions": "1. Mix\n2) Knead\n\nBake"})

        res = client.post("/cooking/sessions", json={"recipe_id": rid})
        assert res.status_code == 201
        state = res.json()
        sid = state["session_id"]
        assert state["steps"] == ["Mix", "Knead", "Bake"]
        assert state["current_instruction"] == "Mix"
        assert [i["name"] for i in state["ingredients"]] == ["Tomato"]

        state = client.post(f"/cooking/sessions/{sid}/next").json()
        assert state["current_step"] == 1

        state = client.post(f"/cooking/sessions/{sid}/steps/2/toggle").json()
        assert state["completed_steps"] == [2]
        assert state["current_step"] == 1

        state = client.post(f"/cooking/sessions/{sid}/steps/2").json()
        assert state["current_instruction"] == "Bake"
        assert state["progress"] == 1.0

        assert client.post(f"/cooking/sessions/{sid}/steps/5").status_code == 400

        state = client.post(f"/cooking/sessions/{sid}/previous").json()
        assert state["current_step"] == 1

        assert client.delete(f"/cooking/sessions/{sid}").status_code == 204
        assert client.get(f"/cooking/sessions/{sid}").status_code == 404

    def test_unknown_recipe_or_session(self, client):
        assert client.post("/cooking/sessions", json={"recipe_id": "missing"}).status_code == 404
        assert client.post("/cooking/sessions/nope/next").status_code == 404
