from rich.pretty import pprint

from argscheme import *


parser = create_parser({
    "info": "Demonstrates how to use argscheme",
    "version": "1.0.0",
    "options": {
        "first-name": {
            "type": "string",
            "short": "f",
            "description": "User's first name",
        },
        "last-name": {
            "type": "string",
            "description": "User's last name",
            "required": True,
        },
        "dog-lover": {
            "description": "User loves dogs",
        },
        "cat-lover": {
            "description": "User loves cats",
        },
    },
    "positional": ["input-file", "output-file"],
})


if __name__ == '__main__':
    pprint(run(parser).values)
