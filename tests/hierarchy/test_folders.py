import uuid

from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from mark_it_down.db.models import File as FileModel, Folder as FolderModel


async def _create_folder(client, headers, name, parent_id=None):
    payload = {"name": name}
    if parent_id:
        payload["parentId"] = parent_id
    r = await client.post("/folders", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["folder"]


async def _create_file(client, headers, name, folder_id=None, content=""):
    payload = {"name": name, "type": "markdown", "content": content}
    if folder_id:
        payload["folderId"] = folder_id
    r = await client.post("/files", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["file"]


async def test_folders_require_session(client):
    r = await client.get("/folders")
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}

    r = await client.get("/folders", headers={"Authorization": "Bearer broken"})
    assert r.status_code == 401


async def test_create_nested_folders(client, user):
    notes = await _create_folder(client, user["headers"], "Notes")
    assert notes["path"] == "/Notes"
    assert notes["parentId"] is None
    assert notes["userId"] == user["id"]

    drafts = await _create_folder(client, user["headers"], "Drafts", notes["id"])
    assert drafts["path"] == "/Notes/Drafts"
    assert drafts["parentId"] == notes["id"]


async def test_create_folder_with_unknown_parent_goes_to_root(client, user):
    missing = str(uuid.uuid4())
    folder = await _create_folder(client, user["headers"], "Loose", missing)
    assert folder["path"] == "/Loose"
    # id родителя сохраняется как передан
    assert folder["parentId"] == missing


async def test_create_folder_requires_name(client, user):
    r = await client.post("/folders", json={}, headers=user["headers"])
    assert r.status_code == 400
    assert r.json() == {"error": "Folder name is required"}


async def test_list_folders_sorted_by_path(client, user):
    b = await _create_folder(client, user["headers"], "b")
    await _create_folder(client, user["headers"], "a")
    await _create_folder(client, user["headers"], "c", b["id"])

    r = await client.get("/folders", headers=user["headers"])
    assert r.status_code == 200
    assert [f["path"] for f in r.json()["folders"]] == ["/a", "/b", "/b/c"]


async def test_list_folders_uses_plain_string_order(client, user):
    # "/a-b" < "/a/x", так как "-" < "/": не обход в глубину
    a = await _create_folder(client, user["headers"], "a")
    await _create_folder(client, user["headers"], "x", a["id"])
    await _create_folder(client, user["headers"], "a-b")

    r = await client.get("/folders", headers=user["headers"])
    assert [f["path"] for f in r.json()["folders"]] == ["/a", "/a-b", "/a/x"]


async def test_list_folders_is_case_sensitive(client, user):
    await _create_folder(client, user["headers"], "apple")
    await _create_folder(client, user["headers"], "Notes")
    await _create_folder(client, user["headers"], "Zebra")

    r = await client.get("/folders", headers=user["headers"])
    assert [f["path"] for f in r.json()["folders"]] == ["/Notes", "/Zebra", "/apple"]


def test_path_columns_use_byte_collation_on_postgres():
    for table in (FolderModel.__table__, FileModel.__table__):
        ddl = str(CreateTable(table).compile(dialect=postgresql.dialect()))
        path_line = next(line for line in ddl.splitlines() if line.strip().startswith("path "))
        assert 'COLLATE "C"' in path_line


async def test_long_names_and_deep_paths_are_stored(client, user):
    name = "n" * 400
    parent = None
    for _ in range(8):
        folder = await _create_folder(client, user["headers"], name, parent)
        parent = folder["id"]

    assert len(folder["path"]) == 8 * 401
    assert folder["name"] == name


async def test_rename_folder_leaves_descendant_paths_stale(client, user):
    notes = await _create_folder(client, user["headers"], "Notes")
    drafts = await _create_folder(client, user["headers"], "Drafts", notes["id"])
    file = await _create_file(client, user["headers"], "a.md", notes["id"])
    assert file["path"] == "/Notes/a.md"

    r = await client.put("/folders", json={"id": notes["id"], "name": "Archive"}, headers=user["headers"])
    assert r.status_code == 200
    assert r.json() == {"message": "Folder updated successfully"}

    folders = {f["id"]: f for f in (await client.get("/folders", headers=user["headers"])).json()["folders"]}
    assert folders[notes["id"]]["path"] == "/Archive"
    assert folders[notes["id"]]["name"] == "Archive"
    # пути потомков не пересчитываются
    assert folders[drafts["id"]]["path"] == "/Notes/Drafts"

    files = (await client.get("/files", headers=user["headers"])).json()["files"]
    assert [f["path"] for f in files] == ["/Notes/a.md"]


async def test_rename_folder_validation_and_missing(client, user):
    r = await client.put("/folders", json={"name": "x"}, headers=user["headers"])
    assert r.status_code == 400
    assert r.json() == {"error": "Folder ID and name are required"}

    r = await client.put("/folders", json={"id": str(uuid.uuid4()), "name": "x"}, headers=user["headers"])
    assert r.status_code == 404
    assert r.json() == {"error": "Folder not found"}


async def test_delete_folder_is_one_level_only(client, user):
    notes = await _create_folder(client, user["headers"], "Notes")
    sub = await _create_folder(client, user["headers"], "Sub", notes["id"])
    direct = await _create_file(client, user["headers"], "direct.md", notes["id"])
    nested = await _create_file(client, user["headers"], "nested.md", sub["id"])
    root = await _create_file(client, user["headers"], "root.md")

    r = await client.delete("/folders", params={"id": notes["id"]}, headers=user["headers"])
    assert r.status_code == 200
    assert r.json() == {"message": "Folder deleted successfully"}

    folders = (await client.get("/folders", headers=user["headers"])).json()["folders"]
    assert [f["id"] for f in folders] == [sub["id"]]
    # подпапка осиротела, но указывает на удалённого родителя
    assert folders[0]["parentId"] == notes["id"]

    files = {f["id"] for f in (await client.get("/files", headers=user["headers"])).json()["files"]}
    assert direct["id"] not in files
    assert nested["id"] in files
    assert root["id"] in files


async def test_delete_folder_missing(client, user):
    r = await client.delete("/folders", params={"id": str(uuid.uuid4())}, headers=user["headers"])
    assert r.status_code == 404

    r = await client.delete("/folders", headers=user["headers"])
    assert r.status_code == 400
    assert r.json() == {"error": "Folder ID is required"}


async def test_malformed_id_is_invalid_input(client, user):
    r = await client.delete("/folders", params={"id": "not-a-uuid"}, headers=user["headers"])
    assert r.status_code == 400
    assert "error" in r.json()
