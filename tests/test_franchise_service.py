import pytest
from fastapi import HTTPException
from sqlalchemy import select

from app.crud.base import get_id
from app.crud.user import user as user_crud
from app.models.franchise import Franchise, Store
from app.models.menu import MenuItem
from app.models.order import DinerOrder, OrderItem
from app.models.user import Role, UserRole
from app.schemas.franchise import FranchiseAdminRef, FranchiseCreate, StoreCreate
from app.schemas.user import RoleAssignment, UserResponse
from app.services.franchise import franchise_service


@pytest.fixture
def owner(make_user):
    return make_user(name="owner", email="owner@test.com", password="owner")


@pytest.fixture
def pocket(db, owner):
    franchise = franchise_service.create_franchise(
        db,
        FranchiseCreate(name="pizzaPocket", admins=[FranchiseAdminRef(email="owner@test.com")]),
    )
    franchise_service.create_store(db, franchise.id, StoreCreate(name="SLC"))
    franchise_service.create_store(db, franchise.id, StoreCreate(name="Provo"))
    return franchise


def _admin():
    return UserResponse(id=1, name="admin", email="a@jwt.com", roles=[RoleAssignment(role=Role.admin)])


def test_create_franchise_grants_franchisee_roles(db, owner):
    franchise = franchise_service.create_franchise(
        db,
        FranchiseCreate(name="pizzaPocket", admins=[FranchiseAdminRef(email="owner@test.com")]),
    )

    assert franchise.id is not None
    assert [(a.id, a.email) for a in franchise.admins] == [(owner.id, "owner@test.com")]
    role = db.execute(select(UserRole).where(UserRole.role == Role.franchisee)).scalar_one()
    assert (role.user_id, role.object_id) == (owner.id, franchise.id)


def test_create_franchise_with_unknown_admin_inserts_nothing(db, owner):
    with pytest.raises(HTTPException) as exc:
        franchise_service.create_franchise(
            db,
            FranchiseCreate(
                name="pizzaPocket",
                admins=[FranchiseAdminRef(email="owner@test.com"), FranchiseAdminRef(email="ghost@test.com")],
            ),
        )

    assert exc.value.status_code == 404
    assert "ghost@test.com" in exc.value.detail
    assert db.execute(select(Franchise)).first() is None
    assert db.execute(select(UserRole).where(UserRole.role == Role.franchisee)).first() is None


def test_create_franchise_rejects_duplicate_name(db, pocket):
    with pytest.raises(HTTPException) as exc:
        franchise_service.create_franchise(db, FranchiseCreate(name="pizzaPocket"))

    assert exc.value.status_code == 409


def test_get_franchise_attaches_admins_and_store_revenue(db, pocket, owner):
    menu_item = MenuItem(title="Veggie", description="A garden of delight", image="pizza1.png", price=0.0038)
    db.add(menu_item)
    db.flush()
    slc = pocket_store_id(db, pocket.id, "SLC")
    order = DinerOrder(diner_id=owner.id, franchise_id=pocket.id, store_id=slc)
    db.add(order)
    db.flush()
    db.add_all([
        OrderItem(order_id=order.id, menu_id=menu_item.id, description="Veggie", price=0.05),
        OrderItem(order_id=order.id, menu_id=menu_item.id, description="Veggie", price=0.05),
    ])
    db.commit()

    franchise = franchise_service.get_franchise_by_id(db, pocket.id)

    assert [a.email for a in franchise.admins] == ["owner@test.com"]
    revenue = {s.name: s.total_revenue for s in franchise.stores}
    assert revenue["SLC"] == pytest.approx(0.1)
    assert revenue["Provo"] == 0


def pocket_store_id(db, franchise_id, name):
    return db.execute(
        select(Store.id).where(Store.franchise_id == franchise_id, Store.name == name)
    ).scalar_one()


def test_get_franchise_by_id_unknown_is_none(db):
    assert franchise_service.get_franchise_by_id(db, 404) is None


def test_get_franchises_for_anonymous_caller_is_lightweight(db, pocket):
    franchises, more = franchise_service.get_franchises(db, None)

    assert more is False
    assert [(f.name, f.admins) for f in franchises] == [("pizzaPocket", None)]
    assert [s.name for s in franchises[0].stores] == ["SLC", "Provo"]
    assert all(s.total_revenue is None for s in franchises[0].stores)


def test_get_franchises_for_admin_is_hydrated(db, pocket):
    franchises, _ = franchise_service.get_franchises(db, _admin())

    assert [a.email for a in franchises[0].admins] == ["owner@test.com"]
    assert all(s.total_revenue == 0 for s in franchises[0].stores)


def test_get_franchises_paginates_with_name_filter(db):
    for name in ["pizzaPocket", "pizzaPalace", "pizzaPlanet", "burgerBarn"]:
        franchise_service.create_franchise(db, FranchiseCreate(name=name))

    first, more = franchise_service.get_franchises(db, None, page=0, limit=2, name_filter="pizza*")
    second, more_after = franchise_service.get_franchises(db, None, page=1, limit=2, name_filter="pizza*")

    assert [f.name for f in first] == ["pizzaPocket", "pizzaPalace"]
    assert more is True
    assert [f.name for f in second] == ["pizzaPlanet"]
    assert more_after is False


def test_get_user_franchises(db, pocket, owner, make_user):
    stranger = make_user(name="stranger", email="stranger@test.com")

    assert franchise_service.get_user_franchises(db, stranger.id) == []
    mine = franchise_service.get_user_franchises(db, owner.id)
    assert [f.name for f in mine] == ["pizzaPocket"]
    assert len(mine[0].stores) == 2


def test_delete_franchise_removes_stores_and_roles(db, pocket):
    franchise_service.delete_franchise(db, pocket.id)

    assert db.execute(select(Franchise)).first() is None
    assert db.execute(select(Store)).first() is None
    assert db.execute(select(UserRole).where(UserRole.role == Role.franchisee)).first() is None


def test_delete_franchise_rolls_back_on_failure(db, pocket, monkeypatch):
    def fail(*args, **kwargs):
        raise RuntimeError("DB Error")

    monkeypatch.setattr(user_crud, "remove_franchise_roles", fail)

    with pytest.raises(HTTPException) as exc:
        franchise_service.delete_franchise(db, pocket.id)

    assert exc.value.status_code == 500
    assert exc.value.detail == "unable to delete franchise"
    assert len(db.execute(select(Store)).scalars().all()) == 2
    assert db.execute(select(Franchise)).scalar_one().name == "pizzaPocket"


def test_create_and_delete_store(db, pocket):
    store = franchise_service.create_store(db, pocket.id, StoreCreate(name="Orem"))

    assert store.franchise_id == pocket.id
    assert store.name == "Orem"

    franchise_service.delete_store(db, pocket.id, store.id)
    names = [s.name for s in franchise_service.get_franchise_by_id(db, pocket.id).stores]
    assert names == ["SLC", "Provo"]


def test_delete_store_requires_matching_franchise(db, pocket):
    slc = pocket_store_id(db, pocket.id, "SLC")

    franchise_service.delete_store(db, pocket.id + 1, slc)

    assert len(franchise_service.get_franchise_by_id(db, pocket.id).stores) == 2


def test_get_id_by_column_value(db, pocket):
    assert get_id(db, Franchise, "name", "pizzaPocket") == pocket.id
    assert get_id(db, Store, "name", "Provo") is not None
    assert get_id(db, Franchise, "name", "nowhere") is None


def _place_order(db, diner_id, franchise_id, store_id):
    menu_item = MenuItem(title="Veggie", description="A garden of delight", image="pizza1.png", price=0.0038)
    db.add(menu_item)
    db.flush()
    order = DinerOrder(diner_id=diner_id, franchise_id=franchise_id, store_id=store_id)
    db.add(order)
    db.flush()
    db.add(OrderItem(order_id=order.id, menu_id=menu_item.id, description="Veggie", price=0.05))
    db.commit()
    return order


def test_delete_franchise_with_orders(db, pocket, owner):
    order = _place_order(db, owner.id, pocket.id, pocket_store_id(db, pocket.id, "SLC"))

    franchise_service.delete_franchise(db, pocket.id)

    assert db.execute(select(Franchise)).first() is None
    assert db.execute(select(Store)).first() is None
    assert db.execute(select(DinerOrder.id)).scalar_one() == order.id


def test_delete_store_with_orders(db, pocket, owner):
    slc = pocket_store_id(db, pocket.id, "SLC")
    _place_order(db, owner.id, pocket.id, slc)

    franchise_service.delete_store(db, pocket.id, slc)

    names = [s.name for s in franchise_service.get_franchise_by_id(db, pocket.id).stores]
    assert names == ["Provo"]
