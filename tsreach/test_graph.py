import unittest

from tsreach.graph import build_graph
from tsreach.reachability import compute_reachable
from tsreach.records import AllExport, ImportRecord, ModuleTable, NamedExport, ParsedFile


class ModuleTableTests(unittest.TestCase):
    def test_keys_are_canonicalized(self):
        table = ModuleTable.build({"./src/../index.ts": ParsedFile(), "lib\\a.ts": ParsedFile()})
        self.assertEqual(set(table), {"index.ts", "lib/a.ts"})

    def test_constructor_canonicalizes_keys(self):
        table = ModuleTable({"./a.ts": ParsedFile(), "b/../c.ts": ParsedFile()})
        self.assertEqual(set(table), {"a.ts", "c.ts"})
        self.assertEqual(table.paths(), frozenset({"a.ts", "c.ts"}))

    def test_duplicate_canonical_keys_keep_first(self):
        first = ParsedFile(exports=(NamedExport("a"),))
        second = ParsedFile(exports=(NamedExport("b"),))
        with self.assertLogs("tsreach.records", level="WARNING"):
            table = ModuleTable.build({"./a.ts": first, "a.ts": second})
        self.assertEqual(len(table), 1)
        self.assertIs(table["a.ts"], first)


class BuildGraphTests(unittest.TestCase):
    def setUp(self):
        self.files = {
            "index.ts": ParsedFile(
                imports=(
                    ImportRecord("./barrel", frozenset({"foo"})),
                    ImportRecord("react", has_default=True),
                    ImportRecord("./missing", frozenset({"x"})),
                    ImportRecord("./setup"),
                )
            ),
            "barrel.ts": ParsedFile(
                exports=(
                    AllExport("./utils"),
                    NamedExport("helper", "./helpers"),
                    NamedExport("local"),
                )
            ),
            "utils.ts": ParsedFile(exports=(NamedExport("foo"),)),
            "helpers.ts": ParsedFile(exports=(NamedExport("helper"),)),
            "setup.ts": ParsedFile(),
        }
        self.graph = build_graph(ModuleTable.build(self.files))

    def test_edges_cover_imports_and_reexports(self):
        self.assertEqual(self.graph.dependencies("index.ts"), frozenset({"barrel.ts", "setup.ts"}))
        self.assertEqual(self.graph.dependencies("barrel.ts"), frozenset({"utils.ts", "helpers.ts"}))
        self.assertEqual(self.graph.dependencies("utils.ts"), frozenset())

    def test_usage_index_only_holds_imports(self):
        self.assertEqual(
            self.graph.importers("barrel.ts"),
            (("index.ts", ImportRecord("./barrel", frozenset({"foo"}))),),
        )
        self.assertEqual(self.graph.importers("setup.ts"), (("index.ts", ImportRecord("./setup")),))
        self.assertEqual(self.graph.importers("utils.ts"), ())

    def test_reexporter_index(self):
        self.assertEqual(self.graph.reexporters_of("utils.ts"), (("barrel.ts", None),))
        self.assertEqual(self.graph.reexporters_of("helpers.ts"), (("barrel.ts", "helper"),))
        self.assertEqual(self.graph.reexporters_of("index.ts"), ())

    def test_several_imports_of_one_target_are_all_indexed(self):
        graph = build_graph(
            ModuleTable.build(
                {
                    "a.ts": ParsedFile(imports=(ImportRecord("./c", frozenset({"x"})), ImportRecord("./c", has_default=True))),
                    "b.ts": ParsedFile(imports=(ImportRecord("./c", has_namespace=True),)),
                    "c.ts": ParsedFile(),
                }
            )
        )
        self.assertEqual([importer for importer, _ in graph.importers("c.ts")], ["a.ts", "a.ts", "b.ts"])

    def test_empty_table(self):
        graph = build_graph(ModuleTable.build({}))
        self.assertEqual(dict(graph.edges), {})
        self.assertEqual(dict(graph.usage), {})


class ReachabilityTests(unittest.TestCase):
    def build(self, edges):
        files = {}
        for path, targets in edges.items():
            files[path] = ParsedFile(imports=tuple(ImportRecord("./" + t[:-3]) for t in targets))
        table = ModuleTable.build(files)
        return build_graph(table), table.paths()

    def test_transitive_closure_includes_entrypoints(self):
        graph, files = self.build({"index.ts": ["a.ts"], "a.ts": ["b.ts"], "b.ts": [], "orphan.ts": []})
        self.assertEqual(compute_reachable(graph, files, ["index.ts"]), {"index.ts", "a.ts", "b.ts"})

    def test_cycles_terminate(self):
        graph, files = self.build({"index.ts": ["a.ts"], "a.ts": ["b.ts"], "b.ts": ["a.ts"]})
        self.assertEqual(compute_reachable(graph, files, ["index.ts"]), {"index.ts", "a.ts", "b.ts"})

    def test_self_import_terminates(self):
        graph, files = self.build({"a.ts": ["a.ts"]})
        self.assertEqual(compute_reachable(graph, files, ["a.ts"]), {"a.ts"})

    def test_entrypoints_are_canonicalized_and_missing_ones_dropped(self):
        graph, files = self.build({"index.ts": ["a.ts"], "a.ts": []})
        self.assertEqual(compute_reachable(graph, files, ["./src/../index.ts", "nope.ts"]), {"index.ts", "a.ts"})

    def test_all_entrypoints_missing_yields_empty_set(self):
        graph, files = self.build({"index.ts": ["a.ts"], "a.ts": []})
        self.assertEqual(compute_reachable(graph, files, ["nope.ts"]), frozenset())
        self.assertEqual(compute_reachable(graph, files, []), frozenset())

    def test_reexport_edges_are_followed(self):
        table = ModuleTable.build(
            {
                "index.ts": ParsedFile(imports=(ImportRecord("./barrel", frozenset({"a"})),)),
                "barrel.ts": ParsedFile(exports=(AllExport("./a"), NamedExport("b", "./b"))),
                "a.ts": ParsedFile(exports=(NamedExport("a"),)),
                "b.ts": ParsedFile(exports=(NamedExport("b"),)),
            }
        )
        graph = build_graph(table)
        self.assertEqual(
            compute_reachable(graph, table.paths(), ["index.ts"]),
            {"index.ts", "barrel.ts", "a.ts", "b.ts"},
        )


if __name__ == "__main__":
    unittest.main()
