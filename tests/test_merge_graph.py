"""Tests for cell merging, table borders and the origin graph."""

from scanreport.core.config import TableConfig
from scanreport.core.models import DependencyTreeItem, DetectedVulnerability, Result
from scanreport.core.reporting.cells import Cell
from scanreport.core.reporting.columns import Column
from scanreport.core.reporting.graph import OriginTree, build_origin_tree, render_origin_graph
from scanreport.core.reporting.merge import mark_merges
from scanreport.core.reporting.table import TableRenderer


def merged_flags(rows):
    return [[cell.merged for cell in row] for row in rows]


# Merge tests


def test_adjacent_equal_cells_merge():
    rows = [
        [Cell("Kubernetes"), Cell("KSV001")],
        [Cell("Kubernetes"), Cell("KSV002")],
        [Cell("Kubernetes"), Cell("KSV003")],
    ]

    assert merged_flags(mark_merges(rows, [0])) == [
        [False, False],
        [True, False],
        [True, False],
    ]


def test_merge_restarts_after_different_value():
    rows = [[Cell("Docker")], [Cell("Kubernetes")], [Cell("Docker")]]

    assert merged_flags(mark_merges(rows, [0])) == [[False], [False], [False]]


def test_empty_cells_never_merge():
    rows = [[Cell(""), Cell("x")], [Cell(""), Cell("x")]]

    assert merged_flags(mark_merges(rows)) == [[False, False], [False, True]]


def test_merge_limited_to_allowed_columns():
    rows = [[Cell("a"), Cell("b")], [Cell("a"), Cell("b")]]

    assert merged_flags(mark_merges(rows, [1])) == [[False, False], [False, True]]
    assert merged_flags(mark_merges(rows, [])) == [[False, False], [False, False]]


def test_merged_cell_keeps_divider_open():
    renderer = TableRenderer([Column("Type"), Column("ID")], TableConfig(), merge_columns=[0])

    table = renderer.render([[Cell("k8s"), Cell("1")], [Cell("k8s"), Cell("2")]])

    assert table == (
        "+------+----+\n"
        "| TYPE | ID |\n"
        "+------+----+\n"
        "| k8s  | 1  |\n"
        "+      +----+\n"
        "|      | 2  |\n"
        "+------+----+\n"
    )


def test_empty_table_renders_nothing():
    assert TableRenderer([Column("Type")], TableConfig()).render([]) == ""


def test_long_free_text_cut_at_cap():
    config = TableConfig(max_column_width=20)
    renderer = TableRenderer([Column("Title", capped=True)], config)

    table = renderer.render([[Cell("z" * 50)]])

    body = table.splitlines()[3]
    assert body == "| " + "z" * 17 + "... |"


# Origin graph tests


def test_shared_prefix_is_one_branch():
    tree = OriginTree("go.sum")
    tree.add_parents("lib@1", [DependencyTreeItem(id="mid@2", parents=[DependencyTreeItem(id="top@3")])])
    tree.add_parents("lib@1", [DependencyTreeItem(id="mid@2", parents=[DependencyTreeItem(id="other@4")])])

    assert tree.render() == (
        "go.sum\n"
        "└── lib@1\n"
        "    └── mid@2\n"
        "        ├── top@3\n"
        "        └── other@4\n"
    )


def test_package_with_several_parents():
    vuln = DetectedVulnerability(
        pkg_name="minimist",
        installed_version="0.0.8",
        pkg_parents=[
            DependencyTreeItem(id="mkdirp@0.5.1", parents=[DependencyTreeItem(id="mocha@5.0.0")]),
            DependencyTreeItem(id="optimist@0.6.1"),
        ],
    )
    tree = build_origin_tree(Result(target="package-lock.json", vulnerabilities=[vuln]))

    assert tree.render() == (
        "package-lock.json\n"
        "└── minimist@0.0.8\n"
        "    ├── mkdirp@0.5.1\n"
        "    │   └── mocha@5.0.0\n"
        "    └── optimist@0.6.1\n"
    )


def test_same_package_twice_shares_branch():
    parents = [DependencyTreeItem(id="express@4.0.0")]
    result = Result(
        target="package-lock.json",
        vulnerabilities=[
            DetectedVulnerability(vulnerability_id="CVE-1", pkg_id="qs@1.0.0", pkg_parents=parents),
            DetectedVulnerability(vulnerability_id="CVE-2", pkg_id="qs@1.0.0", pkg_parents=parents),
        ],
    )

    assert build_origin_tree(result).render() == (
        "package-lock.json\n"
        "└── qs@1.0.0\n"
        "    └── express@4.0.0\n"
    )


def test_graph_skips_results_without_chains():
    plain = Result(
        target="requirements.txt",
        vulnerabilities=[DetectedVulnerability(pkg_id="django@2.0")],
    )

    assert render_origin_graph([plain], TableConfig()) == ""


def test_graph_section_covers_each_target():
    results = [
        Result(
            target=target,
            vulnerabilities=[
                DetectedVulnerability(
                    pkg_id="a@1", pkg_parents=[DependencyTreeItem(id="b@2")]
                )
            ],
        )
        for target in ("one.lock", "two.lock")
    ]

    section = render_origin_graph(results, TableConfig())

    assert section == (
        "\nVulnerability origin graph:\n"
        "===========================\n"
        "one.lock\n"
        "└── a@1\n"
        "    └── b@2\n"
        "\n"
        "two.lock\n"
        "└── a@1\n"
        "    └── b@2\n"
        "\n"
    )


def test_identifiers_printed_literally():
    """Brackets and emoji codes in package IDs are not treated as markup."""
    tree = OriginTree("Pipfile.lock")
    tree.add_parents("requests[socks]@2.31.0", [DependencyTreeItem(id="[bold]:smile:@1")])

    assert tree.render() == (
        "Pipfile.lock\n"
        "└── requests[socks]@2.31.0\n"
        "    └── [bold]:smile:@1\n"
    )


def test_long_identifier_not_wrapped():
    package_id = "x" * 300 + "@1.0.0"
    tree = OriginTree("go.sum")
    tree.add_parents(package_id, [])

    assert tree.render() == f"go.sum\n└── {package_id}\n"
