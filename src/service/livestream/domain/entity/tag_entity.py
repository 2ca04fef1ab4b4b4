import attrs


@attrs.define(frozen=True)
class Tag:
    id: int
    name: str
