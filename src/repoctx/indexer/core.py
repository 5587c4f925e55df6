"""Build the content index from a path -> text map."""

from __future__ import annotations

from repoctx.indexer.extract import (
    calculate_complexity,
    extract_calls,
    extract_classes,
    extract_comments,
    extract_functions,
    extract_tests,
)
from repoctx.indexer.models import (
    ClassRecord,
    CommentRecord,
    ContentIndex,
    FunctionRecord,
    TestRecord,
)


def is_test_file(path: str) -> bool:
    return "test" in path or "spec" in path


class ContentIndexer:
    """Indexes functions, classes, notable comments and tests per file.

    Records are keyed `path:name`. When two passes find the same name in
    one file, the record inserted last replaces the earlier one.
    """

    def index(self, files: dict[str, str]) -> ContentIndex:
        result = ContentIndex(files=dict(files))

        for path, content in files.items():
            for func in extract_functions(content):
                record = FunctionRecord(
                    name=func["name"],
                    path=path,
                    params=func["params"],
                    body=func["body"],
                    complexity=calculate_complexity(func["body"]),
                    calls=extract_calls(func["body"]),
                )
                result.functions[record.key] = record

            for cls in extract_classes(content):
                record = ClassRecord(path=path, **cls)
                result.classes[record.key] = record

            comments = extract_comments(content)
            if comments:
                result.comments[path] = [CommentRecord(**c) for c in comments]

            if is_test_file(path):
                result.tests[path] = [TestRecord(**t) for t in extract_tests(content)]

        return result
