"""Seed the permission catalog and the system roles.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

PERMISSIONS = [
    ("inventario", "ver", "Ver productos y stock"),
    ("inventario", "crear", "Crear productos"),
    ("inventario", "editar", "Editar productos"),
    ("inventario", "eliminar", "Eliminar productos"),
    ("categorias", "ver", "Ver categorías"),
    ("categorias", "crear", "Crear categorías"),
    ("categorias", "editar", "Editar categorías"),
    ("categorias", "eliminar", "Eliminar categorías"),
    ("compras", "ver", "Ver compras e ingresos"),
    ("compras", "crear", "Registrar compras"),
    ("compras", "editar", "Editar compras"),
    ("compras", "eliminar", "Eliminar compras"),
    ("egresos", "ver", "Ver egresos"),
    ("egresos", "crear", "Registrar egresos"),
    ("egresos", "editar", "Editar egresos"),
    ("egresos", "eliminar", "Eliminar egresos"),
    ("facturacion", "ver", "Ver facturas"),
    ("facturacion", "crear", "Crear facturas"),
    ("facturacion", "editar", "Editar facturas"),
    ("facturacion", "eliminar", "Anular facturas"),
    ("usuarios", "ver", "Ver usuarios"),
    ("usuarios", "crear", "Crear usuarios"),
    ("usuarios", "editar", "Editar usuarios"),
    ("usuarios", "eliminar", "Eliminar usuarios"),
    ("roles", "ver", "Ver roles y permisos"),
    ("roles", "crear", "Crear roles"),
    ("roles", "editar", "Editar roles y permisos"),
    ("roles", "eliminar", "Eliminar roles"),
    ("reportes", "ver", "Ver reportes"),
    ("reportes", "exportar", "Exportar reportes"),
    ("configuracion", "ver", "Ver configuración"),
    ("configuracion", "editar", "Editar configuración del sistema"),
]


def _grant(role: str, condition: str) -> None:
    op.execute(f"""
        INSERT INTO role_permission (role_id, permission_id)
        SELECT r.id, p.id FROM role r, permission p
        WHERE r.name = '{role}' AND ({condition})
    """)


def upgrade() -> None:
    values = ",\n".join(
        f"(gen_random_uuid(), '{m}.{a}', '{m}', '{a}', '{d}')" for m, a, d in PERMISSIONS
    )
    op.execute(f"INSERT INTO permission (id, name, module, action, description) VALUES {values}")

    op.execute("""
        INSERT INTO role (id, name, label, description) VALUES
        (gen_random_uuid(), 'super_admin', 'Super Administrador', 'Acceso total al sistema'),
        (gen_random_uuid(), 'administrador', 'Administrador', 'Gestión general del sistema'),
        (gen_random_uuid(), 'empleado', 'Empleado', 'Operaciones diarias'),
        (gen_random_uuid(), 'proveedor', 'Proveedor', 'Acceso limitado para proveedores')
    """)

    _grant("super_admin", "TRUE")
    _grant(
        "administrador",
        "p.module IN ('inventario','categorias','compras','egresos','facturacion','reportes') "
        "OR p.name IN ('usuarios.ver','usuarios.crear','usuarios.editar','configuracion.ver')",
    )
    _grant(
        "empleado",
        "p.name IN ('inventario.ver','inventario.editar','categorias.ver','compras.ver',"
        "'compras.crear','egresos.ver','egresos.crear','facturacion.ver','facturacion.crear',"
        "'reportes.ver')",
    )
    _grant("proveedor", "p.name = 'compras.ver'")


def downgrade() -> None:
    op.execute(
        "DELETE FROM role WHERE name IN ('super_admin','administrador','empleado','proveedor')"
    )
    op.execute("DELETE FROM permission")
