"""Initial schema: users, rooms, catalog, permissions, inventories

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'usuarios',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nombre', sa.String(150), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('rol', sa.String(20), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('fecha_creacion', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('ultimo_acceso', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_usuarios_id', 'usuarios', ['id'], unique=False)
    op.create_index('ix_usuarios_email', 'usuarios', ['email'], unique=True)

    op.create_table(
        'aulas',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('codigo', sa.String(20), nullable=False),
        sa.Column('nombre', sa.String(150), nullable=False),
        sa.Column('edificio', sa.String(100), nullable=True),
        sa.Column('piso', sa.Integer(), nullable=True),
        sa.Column('capacidad', sa.Integer(), nullable=True),
        sa.Column('tipo', sa.String(50), nullable=False, server_default='aula'),
        sa.Column('activa', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('fecha_creacion', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_aulas_id', 'aulas', ['id'], unique=False)
    op.create_index('ix_aulas_codigo', 'aulas', ['codigo'], unique=True)

    op.create_table(
        'categorias',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nombre', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(50), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('icono', sa.String(20), nullable=True),
        sa.Column('orden_display', sa.Integer(), nullable=False),
        sa.Column('activa', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_categorias_id', 'categorias', ['id'], unique=False)
    op.create_index('ix_categorias_slug', 'categorias', ['slug'], unique=True)

    op.create_table(
        'subcategorias',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('id_categoria', sa.Integer(), nullable=False),
        sa.Column('nombre', sa.String(100), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('unidad_medida', sa.String(30), nullable=False, server_default='unidad'),
        sa.Column('permite_cantidad', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('campos_extra', sa.Text(), nullable=True),
        sa.Column('orden_display', sa.Integer(), nullable=False),
        sa.Column('activa', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(['id_categoria'], ['categorias.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_subcategorias_id', 'subcategorias', ['id'], unique=False)
    op.create_index('ix_subcategorias_id_categoria', 'subcategorias', ['id_categoria'], unique=False)

    op.create_table(
        'permisos_categoria',
        sa.Column('rol', sa.String(20), nullable=False),
        sa.Column('id_categoria', sa.Integer(), nullable=False),
        sa.Column('puede_ver', sa.Boolean(), nullable=False),
        sa.Column('puede_editar', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['id_categoria'], ['categorias.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('rol', 'id_categoria')
    )

    op.create_table(
        'inventarios',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('id_aula', sa.Integer(), nullable=False),
        sa.Column('id_usuario', sa.Integer(), nullable=False),
        sa.Column('observaciones', sa.Text(), nullable=True),
        sa.Column('estado_general', sa.String(20), nullable=True),
        sa.Column('fecha_registro', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['id_aula'], ['aulas.id']),
        sa.ForeignKeyConstraint(['id_usuario'], ['usuarios.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_inventarios_id', 'inventarios', ['id'], unique=False)
    op.create_index('ix_inventarios_id_aula', 'inventarios', ['id_aula'], unique=False)
    # Latest-snapshot lookups per room
    op.create_index('ix_inventarios_aula_fecha', 'inventarios', ['id_aula', 'fecha_registro'], unique=False)

    op.create_table(
        'detalles_inventario',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('id_inventario', sa.Integer(), nullable=False),
        sa.Column('id_subcategoria', sa.Integer(), nullable=False),
        sa.Column('cantidad_total', sa.Integer(), nullable=False),
        sa.Column('cantidad_bueno', sa.Integer(), nullable=False),
        sa.Column('cantidad_regular', sa.Integer(), nullable=False),
        sa.Column('cantidad_malo', sa.Integer(), nullable=False),
        sa.Column('cantidad_roto', sa.Integer(), nullable=False),
        sa.Column('especificaciones', sa.Text(), nullable=True),
        sa.Column('observaciones', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['id_inventario'], ['inventarios.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['id_subcategoria'], ['subcategorias.id']),
        sa.CheckConstraint(
            'cantidad_total >= 0 AND cantidad_bueno >= 0 AND cantidad_regular >= 0 '
            'AND cantidad_malo >= 0 AND cantidad_roto >= 0',
            name='ck_detalles_cantidades_no_negativas',
        ),
        sa.CheckConstraint(
            'cantidad_total = cantidad_bueno + cantidad_regular + cantidad_malo + cantidad_roto',
            name='ck_detalles_cantidades_cuadran',
        ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_detalles_inventario_id', 'detalles_inventario', ['id'], unique=False)
    op.create_index('ix_detalles_inventario_id_inventario', 'detalles_inventario', ['id_inventario'], unique=False)
    op.create_index('ix_detalles_inventario_id_subcategoria', 'detalles_inventario', ['id_subcategoria'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_detalles_inventario_id_subcategoria', table_name='detalles_inventario')
    op.drop_index('ix_detalles_inventario_id_inventario', table_name='detalles_inventario')
    op.drop_index('ix_detalles_inventario_id', table_name='detalles_inventario')
    op.drop_table('detalles_inventario')

    op.drop_index('ix_inventarios_aula_fecha', table_name='inventarios')
    op.drop_index('ix_inventarios_id_aula', table_name='inventarios')
    op.drop_index('ix_inventarios_id', table_name='inventarios')
    op.drop_table('inventarios')

    op.drop_table('permisos_categoria')

    op.drop_index('ix_subcategorias_id_categoria', table_name='subcategorias')
    op.drop_index('ix_subcategorias_id', table_name='subcategorias')
    op.drop_table('subcategorias')

    op.drop_index('ix_categorias_slug', table_name='categorias')
    op.drop_index('ix_categorias_id', table_name='categorias')
    op.drop_table('categorias')

    op.drop_index('ix_aulas_codigo', table_name='aulas')
    op.drop_index('ix_aulas_id', table_name='aulas')
    op.drop_table('aulas')

    op.drop_index('ix_usuarios_email', table_name='usuarios')
    op.drop_index('ix_usuarios_id', table_name='usuarios')
    op.drop_table('usuarios')
