#!/usr/bin/env python3
"""
Example script demonstrating CLOptions with short aliases and a config file.

Run with:
    python personal_details.py --Name Sally --Age 56 --Weight 345.678
    python personal_details.py -n Sally -a 56 -w 345.678
    python personal_details.py -ConfigFile details.cfg -a 60
"""

import sys

from cloptions import CLOptions


def define_options() -> CLOptions:
    options = CLOptions()
    options.add_string_param("n,Name", "This is the person's name.", "")
    options.add_int_param("a,Age", "The age of the person in years", 0)
    options.add_double_param("w,Weight", "The weight of the person in pounds.", 0.0)
    options.add_bool_param("Verbose", "Print every parameter before the details.", False)
    options.add_config_file_param()
    options.add_version_param(text="personal_details v1")
    return options


def main() -> int:
    options = define_options()
    if options.parse().should_stop:
        return 0

    if options.as_bool("Verbose"):
        options.print_detailed()

    print(f"Name  : {options.as_string('Name')}")
    print(f"Age   : {options.as_int('Age')}")
    print(f"Weight: {options.as_double('Weight')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
