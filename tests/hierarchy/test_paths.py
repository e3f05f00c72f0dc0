import uuid

from mark_it_down.domains.hierarchy.entities import File, Folder, build_path, rename_path


def test_build_path():
    assert build_path("Notes") == "/Notes"
    assert build_path("a.md", "/Notes") == "/Notes/a.md"
    assert build_path("deep", "/a/b") == "/a/b/deep"


def test_rename_path_replaces_last_segment_only():
    assert rename_path("/Notes", "Archive") == "/Archive"
    assert rename_path("/Notes/sub/a.md", "b.md") == "/Notes/sub/b.md"


def test_folder_rename_keeps_parent_prefix():
    owner = uuid.uuid4()
    parent = Folder.create_folder(owner, "Notes")
    child = Folder.create_folder(owner, "Drafts", parent)
    assert child.path == "/Notes/Drafts"
    assert child.parent_id == parent.uuid

    child.rename("Ideas")
    assert child.name == "Ideas"
    assert child.path == "/Notes/Ideas"


def test_file_type_is_normalized():
    owner = uuid.uuid4()
    assert File.create_file(owner, "a.md", "markdown").type == "markdown"
    assert File.create_file(owner, "a.txt", "text").type == "text"
    assert File.create_file(owner, "a.html", "html").type == "text"


def test_file_sync_path_strips_leading_slash():
    owner = uuid.uuid4()
    folder = Folder.create_folder(owner, "Notes")
    file = File.create_file(owner, "a.md", "markdown", "# hi", folder)
    assert file.path == "/Notes/a.md"
    assert file.get_sync_path() == "Notes/a.md"
    assert file.content == "# hi"
    assert File.create_file(owner, "b.md", "markdown").content == ""


def test_dangling_parent_id_is_kept_with_root_path():
    owner = uuid.uuid4()
    missing = uuid.uuid4()

    folder = Folder.create_folder(owner, "Loose", None, missing)
    assert folder.path == "/Loose"
    assert folder.parent_id == missing

    file = File.create_file(owner, "a.md", "markdown", folder=None, folder_id=missing)
    assert file.path == "/a.md"
    assert file.folder_id == missing
