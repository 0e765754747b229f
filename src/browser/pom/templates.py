"""Source templates for generated page objects."""

# Field registry module, one class of locator constants
FIELD_REGISTRY_TEMPLATE = '''"""Field locators of the {page_name} page.

Generated file. Regeneration overwrites it; keep customizations elsewhere.
"""


class {page_name}Field:
    """Locators of the {page_name} page, in document order."""

{constants}
'''

# One registry constant
FIELD_CONSTANT_TEMPLATE = "    {identifier} = {locator}"

# Body of a registry without fields
EMPTY_BODY = "    pass"

# Page accessor module delegating to a page driver
PAGE_ACCESSOR_TEMPLATE = '''"""Page object of the {page_name} page.

Generated file. Regeneration overwrites it; keep customizations elsewhere.
"""

from .{page_name}Field import {page_name}Field


class {page_name}Page:
    """Accessors of the {page_name} page.

    The driver is any object providing navigate, set_resources_root,
    set_value, click and select_option. Driver errors propagate unchanged.
    """

    LOCATION = {location}
    RESOURCES_ROOT = {resources_root}

    def __init__(self, driver):
        self.driver = driver

    def navigate(self, resources_root=RESOURCES_ROOT, location=LOCATION):
        self.driver.set_resources_root(resources_root)
        self.driver.navigate(location)
{accessors}'''

SET_VALUE_TEMPLATE = '''
    def set_{method}(self, text):
        self.driver.set_value({page_name}Field.{identifier}, text)
'''

SELECT_TEMPLATE = '''
    def choose_{method}(self, text):
        self.driver.select_option({page_name}Field.{identifier}, text)
'''

CLICK_TEMPLATE = '''
    def click_{method}(self):
        self.driver.click({page_name}Field.{identifier})
'''
