"""Shared fixtures for core unit tests"""

import pytest

from mdrich.core import style


BASE = style.DEFAULT_BASE_SIZE

SAMPLE_MD = """\
# Heading
This is **bold text**, and this is _italic_.
text ~~struck~~
***bold italic***
`code`

[Link](https://www.deepl.com/translator)
1. *Item 1*
2. __Item 2__
3. ***Item 3***

- *Item 1*
- __Item 2__
- ***Item 3***
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="plain")
def plain_fixture():
    return style.plain(BASE)
