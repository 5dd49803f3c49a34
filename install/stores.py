"""Repository-style access to the seeded tables.

Every ``save``/``save_all`` is insert-if-absent by natural key: if a row with
the same key already exists (in the database or earlier in the same batch) the
existing row is returned and the candidate is dropped. Saves flush but never
commit; transaction boundaries belong to the caller.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from models.cities import City
from models.countries import Country
from models.entities import Entity
from models.identities import Identity
from models.operators import Operator
from models.states import State
from models.users import User


def normalize_principal(principal: str) -> str:
    return (principal or "").strip().lower()


class OperatorStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_name(self, operator_name: str) -> Operator | None:
        return (
            self.session.query(Operator)
            .filter_by(operator_name=operator_name)
            .one_or_none()
        )

    def save(self, operator: Operator) -> Operator:
        existing = self.find_by_name(operator.operator_name)
        if existing is not None:
            return existing
        self.session.add(operator)
        self.session.flush()
        return operator


class _CodedStore:
    """Shared save_all for (operator, code) keyed reference tables."""

    model: type
    code_attr: str

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_code(self, context: Operator, code: str):
        return (
            self.session.query(self.model)
            .filter_by(operator_id=context.id, **{self.code_attr: code})
            .one_or_none()
        )

    def count(self, context: Operator) -> int:
        return self.session.query(self.model).filter_by(operator_id=context.id).count()

    def save_all(self, records: Iterable) -> list:
        """Persist records, returning the managed row for each distinct key."""

        managed: dict[tuple[int, str], object] = {}
        for record in records:
            context = record.operator
            code = getattr(record, self.code_attr)
            key = (context.id, code)
            if key in managed:
                continue
            existing = self.find_by_code(context, code)
            if existing is None:
                self.session.add(record)
                existing = record
            managed[key] = existing
        self.session.flush()
        return list(managed.values())


class CountryStore(_CodedStore):
    model = Country
    code_attr = "country_code"


class StateStore(_CodedStore):
    model = State
    code_attr = "state_code"


class CityStore(_CodedStore):
    model = City
    code_attr = "city_code"


class IdentityStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_principal(self, principal: str) -> Identity | None:
        return (
            self.session.query(Identity)
            .filter_by(principal=normalize_principal(principal))
            .one_or_none()
        )

    def save(self, identity: Identity) -> Identity:
        identity.principal = normalize_principal(identity.principal)
        existing = self.find_by_principal(identity.principal)
        if existing is not None:
            return existing
        self.session.add(identity)
        self.session.flush()
        return identity


class EntityStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_alias(self, context: Operator, alias: str) -> Entity | None:
        return (
            self.session.query(Entity)
            .filter_by(operator_id=context.id, alias=alias)
            .one_or_none()
        )

    def count(self, context: Operator) -> int:
        return self.session.query(Entity).filter_by(operator_id=context.id).count()

    def save(self, entity: Entity) -> Entity:
        existing = self.find_by_alias(entity.operator, entity.alias)
        if existing is not None:
            return existing
        self.session.add(entity)
        self.session.flush()
        return entity


class UserStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_entity_and_identity(
        self, entity: Entity, identity: Identity
    ) -> User | None:
        return (
            self.session.query(User)
            .filter_by(entity_id=entity.id, identity_id=identity.id)
            .one_or_none()
        )

    def count(self, context: Operator) -> int:
        return (
            self.session.query(User)
            .join(Entity, User.entity_id == Entity.id)
            .filter(Entity.operator_id == context.id)
            .count()
        )

    def save(self, user: User) -> User:
        existing = self.find_by_entity_and_identity(user.entity, user.identity)
        if existing is not None:
            return existing
        self.session.add(user)
        self.session.flush()
        return user


@dataclass(frozen=True)
class Stores:
    session: Session
    operators: OperatorStore
    countries: CountryStore
    states: StateStore
    cities: CityStore
    identities: IdentityStore
    entities: EntityStore
    users: UserStore

    @classmethod
    def from_session(cls, session: Session) -> "Stores":
        return cls(
            session=session,
            operators=OperatorStore(session),
            countries=CountryStore(session),
            states=StateStore(session),
            cities=CityStore(session),
            identities=IdentityStore(session),
            entities=EntityStore(session),
            users=UserStore(session),
        )
