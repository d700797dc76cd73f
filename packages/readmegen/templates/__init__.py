"""Built-in README templates."""

from readmegen.templates.dual_license_readme_template import DUAL_LICENSE_README_TEMPLATE

__all__ = ["DUAL_LICENSE_README_TEMPLATE"]
