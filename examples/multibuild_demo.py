"""MultiBuild 데모 스크립트

toy 번들러로 세 개의 번들(app, spec, vendor)을 빌드하고,
파일 하나를 바꿨을 때 그 파일을 포함하는 번들만 다시 빌드되는 것을 보여준다.

Run: python examples/multibuild_demo.py
"""

import asyncio
import re
import tempfile
from pathlib import Path

from multibuild import BuildSuccess, BundleOutput, CallableBundler, ModuleRecord, MultiBuild, MultiBuildOptions
from multibuild.config import get_settings
from multibuild.infra.observability import setup_logging

IMPORT_RE = re.compile(r'^import\s+"([^"]+)"', re.MULTILINE)


def toy_bundle(entry: Path, cache, options):
    """`import "x.js"` 줄만 따라가는 최소 번들러 (캐시된 모듈은 다시 읽지 않음)"""
    cached = {record.id: record for record in cache.modules}
    seen: dict[str, ModuleRecord] = {}
    stack = [entry.resolve()]

    while stack:
        path = stack.pop()
        module_id = str(path)
        if module_id in seen:
            continue
        record = cached.get(module_id)
        if record is None or record.payload != path.stat().st_mtime_ns:
            record = ModuleRecord(id=module_id, payload=path.stat().st_mtime_ns)
        seen[module_id] = record
        for name in IMPORT_RE.findall(path.read_text()):
            stack.append((path.parent / name).resolve())

    code = "\n".join(Path(module_id).read_text() for module_id in seen)
    return BuildSuccess(modules=tuple(seen.values()), output=f"/* {options.get('banner', '')} */\n{code}")


def write_sources(root: Path) -> None:
    (root / "util.js").write_text("export const util = 1;\n")
    (root / "lib.js").write_text("export const lib = 2;\n")
    (root / "app.js").write_text('import "util.js"\nimport "lib.js"\n')
    (root / "spec.js").write_text('import "util.js"\n')
    (root / "vendor.js").write_text('import "lib.js"\n')


async def main():
    settings = get_settings()
    setup_logging(settings.observability.log_level, settings.observability.log_format)

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        write_sources(root)
        dist = root / "dist"
        dist.mkdir()

        def output(target: str, bundle: BundleOutput) -> None:
            (dist / bundle.file_name).write_bytes(bundle.contents)

        build = MultiBuild(
            MultiBuildOptions.create(
                targets=["app", "spec", "vendor"],
                cache_groups={"vendor": ["vendor"]},
                entry=lambda target: root / f"{target}.js",
                rollup_options={"banner": "built by multibuild"},
                output=output,
                error_handler=lambda error: print(f"build error: {error}"),
            ),
            bundler=CallableBundler(toy_bundle),
        )

        print("=" * 70)
        print("전체 빌드")
        print("=" * 70)
        await build.run_all()
        print(sorted(p.name for p in dist.iterdir()))

        print("=" * 70)
        print("util.js 변경 → app, spec만 재빌드")
        print("=" * 70)
        (root / "util.js").write_text("export const util = 42;\n")
        reports = await build.changed(str((root / "util.js").resolve()))
        print([report.target for report in reports])


if __name__ == "__main__":
    asyncio.run(main())
