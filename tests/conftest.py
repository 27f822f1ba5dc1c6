"""Shared fixtures for FlavorQuiz tests."""

from __future__ import annotations

import pytest
import yaml

from flavorquiz.engine.taxonomy import ProductCategoryEntry


@pytest.fixture
def berry_database():
    """Small taxonomy with berries, citrus and a nameless-category product."""
    return [
        ProductCategoryEntry(name="Blue Razz Ice", primary="Fruit", secondary="Berry",
                             tertiary="Blue Raspberry", quaternary="Menthol"),
        ProductCategoryEntry(name="Blueberry Bliss", primary="Fruit", secondary="Berry",
                             tertiary="Blueberry"),
        ProductCategoryEntry(name="Berry Blast", primary="Fruit", secondary="Berry",
                             tertiary="Blueberry"),
        ProductCategoryEntry(name="Lemon Drop", primary="Fruit", secondary="Citrus",
                             tertiary="Lemon"),
        ProductCategoryEntry(name="Vanilla Custard", primary="Dessert", secondary="Custard"),
        ProductCategoryEntry(name="Mystery Mix"),
    ]


@pytest.fixture
def taxonomy_csv(tmp_path):
    """Comma-separated taxonomy using the catalog's column headers."""
    path = tmp_path / "taxonomy.csv"
    path.write_text(
        "Product Name,Edition,Primary Category,Secondary Category,"
        "Tertiary Category,Quaternary Category,Notes\n"
        "Blue Razz Ice,Original,Fruit,Berry,Blue Raspberry,Menthol,\n"
        "Blueberry Bliss,,Fruit,Berry,Blueberry,,\"sweet, jammy\"\n"
        ",,Fruit,Berry,,,orphan row\n"
        "\n"
        "Lemon Drop,Salt,Fruit,Citrus,Lemon,,\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def taxonomy_tsv(tmp_path):
    path = tmp_path / "taxonomy.tsv"
    path.write_text(
        "name\tprimary\tsecondary\ttertiary\tquaternary\tflavor_code\n"
        "Strawberry Jam\tFruit\tBerry\tStrawberry\t\tSJ1\n"
        "Mango Tango\tFruit\tTropical\tMango\t\tMT2\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def taxonomy_yaml(tmp_path):
    path = tmp_path / "taxonomy.yaml"
    with open(path, "w") as f:
        yaml.dump(
            [
                {"name": "Cherry Cola", "primary": "Soda", "secondary": "Cola"},
                {"primary": "Soda"},
                {"Product Name": "Root Beer Float", "Primary Category": "Soda",
                 "Secondary Category": "Cream"},
            ],
            f,
        )
    return path
