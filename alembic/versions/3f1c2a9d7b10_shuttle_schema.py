"""shuttle schema: countries, cities, routes, amenities, hotels, users

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:12:31.402117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=20), server_default='USER', nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'countries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=120), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_countries_name'),
        sa.UniqueConstraint('slug', name='uq_countries_slug'),
    )

    op.create_table(
        'cities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=240), nullable=False),
        sa.Column('country_id', sa.Integer(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['country_id'], ['countries.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', 'country_id', name='uq_cities_name_country'),
        sa.UniqueConstraint('slug', name='uq_cities_slug'),
    )
    op.create_index('ix_cities_country_id', 'cities', ['country_id'])

    op.create_table(
        'amenities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'hotels',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('city_id', sa.Integer(), nullable=False),
        sa.Column('link', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['city_id'], ['cities.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', 'city_id', name='uq_hotels_name_city'),
    )
    op.create_index('ix_hotels_city_id', 'hotels', ['city_id'])

    op.create_table(
        'routes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('departure_city_id', sa.Integer(), nullable=False),
        sa.Column('destination_city_id', sa.Integer(), nullable=False),
        sa.Column('departure_country_id', sa.Integer(), nullable=False),
        sa.Column('destination_country_id', sa.Integer(), nullable=False),
        sa.Column('route_slug', sa.String(length=255), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=False),
        sa.Column('viator_widget_code', sa.Text(), nullable=False),
        sa.Column('meta_title', sa.String(length=255), nullable=True),
        sa.Column('meta_description', sa.Text(), nullable=True),
        sa.Column('meta_keywords', sa.Text(), nullable=True),
        sa.Column('seo_description', sa.Text(), nullable=True),
        sa.Column('is_airport_pickup', sa.Boolean(), nullable=False),
        sa.Column('is_airport_dropoff', sa.Boolean(), nullable=False),
        sa.Column('is_city_to_city', sa.Boolean(), nullable=False),
        sa.Column('is_private_driver', sa.Boolean(), nullable=False),
        sa.Column('is_sightseeing_shuttle', sa.Boolean(), nullable=False),
        sa.Column('other_stops', sa.Text(), nullable=True),
        sa.Column('travel_time', sa.String(length=100), nullable=True),
        sa.Column('additional_instructions', sa.Text(), nullable=True),
        sa.Column('map_waypoints', sa.JSON(), nullable=True),
        sa.Column('possible_nearby_stops', sa.JSON(), nullable=True),
        sa.Column('viator_destination_link', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['departure_city_id'], ['cities.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['destination_city_id'], ['cities.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['departure_country_id'], ['countries.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['destination_country_id'], ['countries.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('route_slug', name='uq_routes_route_slug'),
    )
    op.create_index('ix_routes_departure_city_id', 'routes', ['departure_city_id'])
    op.create_index('ix_routes_destination_city_id', 'routes', ['destination_city_id'])
    op.create_index('ix_routes_departure_country_id', 'routes', ['departure_country_id'])
    op.create_index('ix_routes_destination_country_id', 'routes', ['destination_country_id'])

    op.create_table(
        'route_amenities',
        sa.Column('route_id', sa.Integer(), nullable=False),
        sa.Column('amenity_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['route_id'], ['routes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['amenity_id'], ['amenities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('route_id', 'amenity_id'),
    )

    op.create_table(
        'route_hotels',
        sa.Column('route_id', sa.Integer(), nullable=False),
        sa.Column('hotel_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['route_id'], ['routes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['hotel_id'], ['hotels.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('route_id', 'hotel_id'),
    )


def downgrade() -> None:
    op.drop_table('route_hotels')
    op.drop_table('route_amenities')
    op.drop_index('ix_routes_destination_country_id', table_name='routes')
    op.drop_index('ix_routes_departure_country_id', table_name='routes')
    op.drop_index('ix_routes_destination_city_id', table_name='routes')
    op.drop_index('ix_routes_departure_city_id', table_name='routes')
    op.drop_table('routes')
    op.drop_index('ix_hotels_city_id', table_name='hotels')
    op.drop_table('hotels')
    op.drop_table('amenities')
    op.drop_index('ix_cities_country_id', table_name='cities')
    op.drop_table('cities')
    op.drop_table('countries')
    op.drop_table('users')
