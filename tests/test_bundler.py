"""Tests for rewriting bare module imports in the build."""

import json
from pathlib import Path
from typing import Callable

from sitewright.builder.bundler import bundle

WriteTree = Callable[[Path, dict[str, str]], None]


def test_bundle_rewrites_bare_imports(tmp_path: Path, write_tree: WriteTree) -> None:
    build_path = tmp_path / "public"
    node_modules = tmp_path / "node_modules"
    write_tree(
        node_modules,
        {
            "nunjucks/package.json": json.dumps({"main": "./index.js"}),
            "nunjucks/index.js": 'import helper from "helper";\nexport default {};\n',
            "nunjucks/node_modules/nested/index.js": "",
            "helper/package.json": json.dumps({"module": "dist/helper.mjs"}),
            "helper/dist/helper.mjs": "export default 1;\n",
        },
    )
    write_tree(
        build_path,
        {
            "spa/ejected/main.js": (
                'import nunjucks from "nunjucks";\n'
                'import { createRouter } from "./router.js";\n'
                'import "@scope/missing";\n'
            ),
        },
    )

    bundle(build_path, node_modules)

    main = (build_path / "spa/ejected/main.js").read_text()
    assert 'import nunjucks from "/spa/web_modules/nunjucks/index.js";' in main
    assert 'from "./router.js"' in main
    assert 'import "@scope/missing";' in main

    web_modules = build_path / "spa" / "web_modules"
    assert not (web_modules / "nunjucks" / "node_modules").exists()
    copied = (web_modules / "nunjucks" / "index.js").read_text()
    assert 'from "/spa/web_modules/helper/dist/helper.mjs"' in copied


def test_bundle_without_spa_does_nothing(tmp_path: Path) -> None:
    build_path = tmp_path / "public"
    build_path.mkdir()
    bundle(build_path, tmp_path / "node_modules")
    assert list(build_path.iterdir()) == []


def test_bundle_leaves_generated_data_modules_alone(
    tmp_path: Path, write_tree: WriteTree
) -> None:
    build_path = tmp_path / "public"
    node_modules = tmp_path / "node_modules"
    write_tree(node_modules, {"nunjucks/index.js": "export default {};\n"})
    content = (
        "export default "
        + json.dumps([{"body": "Load it with import 'nunjucks' in your page."}])
        + ";\n"
    )
    write_tree(build_path, {"spa/generated/content.js": content})

    bundle(build_path, node_modules)

    assert (build_path / "spa/generated/content.js").read_text() == content
    assert not (build_path / "spa" / "web_modules").exists()
