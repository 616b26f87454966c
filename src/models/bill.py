"""Congressional bill data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BillIdentity:
    """Composite key of a bill: congress, bill type and bill number."""

    congress: int
    type: str
    number: str

    def __post_init__(self):
        if self.congress <= 0:
            raise ValueError("congress must be > 0")
        if not self.type:
            raise ValueError("type must not be empty")
        if not str(self.number):
            raise ValueError("number must not be empty")
        object.__setattr__(self, "number", str(self.number))

    @property
    def bill_id(self) -> str:
        return f"{self.congress}-{self.type}-{self.number}"

    def __str__(self) -> str:
        return self.bill_id


@dataclass
class Sponsor:
    first_name: str
    last_name: str
    party: str
    state: str
    district: int | None = None

    def format(self) -> str:
        """Render as 'First Last (P-ST-district)'."""
        district = f"-{self.district}" if self.district is not None else ""
        return f"{self.first_name} {self.last_name} ({self.party}-{self.state}{district})"


@dataclass
class LatestAction:
    action_date: str
    text: str


@dataclass
class Bill:
    """Bill metadata as provided by the Congress.gov listing endpoints."""

    congress: int
    type: str
    number: str
    title: str
    introduced_date: str = ""
    url: str = ""
    latest_action: LatestAction | None = None
    sponsors: list[Sponsor] = field(default_factory=list)
    summary: str | None = None

    def __post_init__(self):
        self.number = str(self.number)
        if not self.title:
            raise ValueError("title must not be empty")

    @property
    def identity(self) -> BillIdentity:
        return BillIdentity(congress=self.congress, type=self.type, number=self.number)

    @property
    def bill_id(self) -> str:
        return self.identity.bill_id
