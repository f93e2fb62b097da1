from pytest_regressions.file_regression import FileRegressionFixture

from hashlens.datalayer.registry import default_registry, category_slug

def test_category_listing(file_regression: FileRegressionFixture):
    registry = default_registry()
    lines = [f"{title} [{category_slug(title)}]: {', '.join(ids)}"
             for title, ids in registry.list_by_category().items()]

    file_regression.check("\n".join(lines) + "\n", extension=".txt", encoding="utf-8")
