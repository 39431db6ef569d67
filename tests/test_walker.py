"""Document tree builder tests."""

import os
from pathlib import Path

import pytest

from docsite.content.paths import parse_entry_name
from docsite.content.schemas import ContentNode
from docsite.content.walker import build_tree, iter_documents


def titles(nodes: list[ContentNode]) -> list[str]:
    return [node.title for node in nodes]


def all_nodes(nodes: list[ContentNode]):
    for node in nodes:
        yield node
        if node.children:
            yield from all_nodes(node.children)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("01-Install.md", (1, "Install")),
        ("10-FAQ.md", (10, "FAQ")),
        ("02-Advanced", (2, "Advanced")),
        ("notes.md", (999, "notes")),
        ("Zeta", (999, "Zeta")),
        ("2024-review.md", (2024, "review")),
    ],
)
def test_parse_entry_name(name: str, expected: tuple[int, str]) -> None:
    """Order prefixes and extensions are split off the title."""
    assert parse_entry_name(name) == expected


def test_top_level_order(content_root: Path) -> None:
    """Siblings sort by prefix, then folders before files, then title."""
    tree = build_tree(content_root)
    assert titles(tree) == ["Guides", "Intro", "Zeta", "notes"]
    assert [node.type for node in tree] == ["folder", "file", "folder", "file"]


def test_numeric_prefix_is_not_lexicographic(content_root: Path) -> None:
    """Prefix 10 sorts after prefix 2."""
    guides = build_tree(content_root)[0]
    assert guides.children is not None
    assert titles(guides.children) == ["Install", "Advanced", "FAQ"]


def test_paths_are_relative_and_unique(content_root: Path) -> None:
    """Every node path is root-relative, POSIX and unique."""
    paths = [node.path for node in all_nodes(build_tree(content_root))]
    assert len(paths) == len(set(paths))
    assert "01-Guides/02-Advanced/deep.md" in paths
    assert all(not p.startswith("/") for p in paths)


def test_non_documents_hidden_and_readme_excluded(content_root: Path) -> None:
    """Only markdown documents are listed."""
    names = {node.name for node in all_nodes(build_tree(content_root))}
    assert "README.md" not in names
    assert ".hidden.md" not in names
    assert "image.png" not in names


def test_files_have_no_children(content_root: Path) -> None:
    """File nodes never carry children."""
    for node in all_nodes(build_tree(content_root)):
        if node.type == "file":
            assert node.children is None


def test_empty_folder_has_no_children(content_root: Path) -> None:
    """Folders without documents are listed without a children list."""
    (content_root / "empty").mkdir()
    empty = next(node for node in build_tree(content_root) if node.name == "empty")
    assert empty.type == "folder"
    assert empty.children is None


def test_missing_root_returns_empty(tmp_path: Path) -> None:
    """A missing root fails closed."""
    assert build_tree(tmp_path / "nope") == []


def test_root_that_is_a_file_returns_empty(tmp_path: Path) -> None:
    """A root pointing at a file fails closed."""
    target = tmp_path / "file.md"
    target.write_text("x", encoding="utf-8")
    assert build_tree(target) == []


def test_symlink_outside_root_is_skipped(content_root: Path, tmp_path: Path) -> None:
    """Links that resolve outside the root are never listed."""
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.md").write_text("secret", encoding="utf-8")
    os.symlink(outside, content_root / "linked", target_is_directory=True)
    os.symlink(outside / "secret.md", content_root / "secret.md")

    nodes = list(all_nodes(build_tree(content_root)))
    assert "linked" not in {node.name for node in nodes}
    assert "secret.md" not in {node.name for node in nodes}

    root = content_root.resolve()
    for node in nodes:
        assert (root / node.path).resolve().is_relative_to(root)


def test_symlink_cycle_terminates(content_root: Path) -> None:
    """A link back to an ancestor does not recurse forever."""
    os.symlink(content_root, content_root / "Zeta" / "loop", target_is_directory=True)
    tree = build_tree(content_root)
    zeta = next(node for node in tree if node.name == "Zeta")
    assert zeta.children is not None
    assert [child.name for child in zeta.children] == ["z.md"]


def test_symlink_inside_root_is_followed(content_root: Path) -> None:
    """Links to documents inside the root are listed."""
    os.symlink(content_root / "02-Intro.md", content_root / "alias.md")
    names = {node.name for node in build_tree(content_root)}
    assert "alias.md" in names


def test_iter_documents_in_display_order(content_root: Path) -> None:
    """Documents are yielded depth-first in sibling order."""
    paths = [node.path for node in iter_documents(build_tree(content_root))]
    assert paths == [
        "01-Guides/01-Install.md",
        "01-Guides/02-Advanced/deep.md",
        "01-Guides/10-FAQ.md",
        "02-Intro.md",
        "Zeta/z.md",
        "notes.md",
    ]


def test_build_is_deterministic(content_root: Path) -> None:
    """Two builds of the same tree are identical."""
    assert build_tree(content_root) == build_tree(content_root)


@pytest.mark.parametrize(
    ("real", "link"),
    [("a", "b"), ("b", "a"), ("docs", "alias"), ("x1", "x0")],
)
def test_link_to_sibling_folder_keeps_both(
    tmp_path: Path, real: str, link: str
) -> None:
    """A link to a sibling folder never hides the real folder."""
    root = tmp_path / "content"
    (root / real).mkdir(parents=True)
    (root / real / "doc.md").write_text("# Doc\n", encoding="utf-8")
    os.symlink(root / real, root / link, target_is_directory=True)

    tree = build_tree(root)
    assert sorted(node.name for node in tree) == sorted([real, link])
    for node in tree:
        assert node.children is not None
        assert [child.path for child in node.children] == [f"{node.name}/doc.md"]


def test_unreadable_subdirectory_is_empty_folder(
    content_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A folder that cannot be listed appears without children."""
    original_iterdir = Path.iterdir

    def iterdir(self: Path):
        if self.name == "Zeta":
            raise PermissionError(13, "Permission denied", str(self))
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", iterdir)

    tree = build_tree(content_root)
    zeta = next(node for node in tree if node.name == "Zeta")
    assert zeta.type == "folder"
    assert zeta.children is None
    assert titles(tree) == ["Guides", "Intro", "Zeta", "notes"]
