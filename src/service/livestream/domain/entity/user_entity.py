import attrs


@attrs.define(frozen=True)
class User:
    id: int
    name: str
    display_name: str = ''
    description: str = ''
