"""
Tests — /api/v1/products/ endpoints.

@file products/tests/test_views.py
"""

import uuid
from unittest import mock

import pytest
from django.urls import reverse
from rest_framework import status

from products.models import Product
from tests.factories import ProductFactory


pytestmark = pytest.mark.django_db

LIST_URL = reverse('api-v1:products:product-list')
LOW_STOCK_URL = reverse('api-v1:products:product-low-stock')


def _detail_url(product_id):
    return reverse('api-v1:products:product-detail', kwargs={'pk': product_id})


def _status_url(product_id):
    return reverse('api-v1:products:product-stock-status', kwargs={'pk': product_id})


class TestProductRegistration:

    def test_staff_can_create(self, staff_client):
        response = staff_client.post(LIST_URL, {'name': 'Widget', 'description': 'Blue'}, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()['data']
        assert data['name'] == 'Widget'
        assert data['quantity'] == 0
        assert data['stock_status'] == 'OUT_OF_STOCK'

    def test_quantity_in_payload_ignored(self, staff_client):
        response = staff_client.post(LIST_URL, {'name': 'Widget', 'quantity': 99}, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()['data']['quantity'] == 0

    def test_duplicate_name_conflict(self, staff_client):
        ProductFactory(name='Widget')
        response = staff_client.post(LIST_URL, {'name': 'widget'}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()['code'] == 'DUPLICATE_RESOURCE'

    def test_insert_race_on_name_is_conflict(self, staff_client):
        ProductFactory(name='Widget')
        with mock.patch('products.services._name_taken', return_value=False):
            response = staff_client.post(LIST_URL, {'name': 'Widget'}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()['code'] == 'DUPLICATE_RESOURCE'

    def test_blank_name_rejected(self, staff_client):
        response = staff_client.post(LIST_URL, {'name': '   '}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_regular_user_cannot_create(self, authenticated_client):
        response = authenticated_client.post(LIST_URL, {'name': 'Widget'}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_no_update_endpoint(self, staff_client):
        product = ProductFactory()
        response = staff_client.patch(_detail_url(product.pk), {'name': 'X'}, format='json')
        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED


class TestProductListing:

    def test_list_only_active(self, staff_client):
        active = ProductFactory(name='Active')
        gone = ProductFactory(name='Gone')
        staff_client.delete(_detail_url(gone.pk))

        response = staff_client.get(LIST_URL)
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert [p['id'] for p in body['data']] == [str(active.pk)]
        assert body['meta']['count'] == 1

    def test_retrieve(self, authenticated_client):
        product = ProductFactory(initial_stock=12)
        response = authenticated_client.get(_detail_url(product.pk))
        data = response.json()['data']
        assert data['quantity'] == 12
        assert data['is_low_stock'] is False
        assert data['stock_status'] == 'IN_STOCK'

    def test_low_stock(self, authenticated_client):
        low = ProductFactory(name='Low', initial_stock=2)
        empty = ProductFactory(name='Empty')
        ProductFactory(name='Full', initial_stock=40)
        response = authenticated_client.get(LOW_STOCK_URL)
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['success'] is True
        assert [p['id'] for p in body['data']] == [str(empty.pk), str(low.pk)]

    def test_low_stock_threshold_param(self, authenticated_client):
        ProductFactory(initial_stock=30)
        response = authenticated_client.get(LOW_STOCK_URL, {'threshold': 30})
        assert len(response.json()['data']) == 1

    def test_low_stock_negative_threshold_rejected(self, authenticated_client):
        response = authenticated_client.get(LOW_STOCK_URL, {'threshold': -1})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_stock_status(self, authenticated_client):
        product = ProductFactory(initial_stock=10)
        response = authenticated_client.get(_status_url(product.pk))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data'] == {
            'product_id': str(product.pk),
            'quantity': 10,
            'threshold': 10,
            'status': 'LOW',
        }

    def test_stock_status_unknown_product(self, authenticated_client):
        response = authenticated_client.get(_status_url(uuid.uuid4()))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_requires_authentication(self, api_client):
        assert api_client.get(LIST_URL).status_code == status.HTTP_401_UNAUTHORIZED


class TestProductDeactivation:

    def test_deactivate_empty_product(self, staff_client):
        product = ProductFactory()
        response = staff_client.delete(_detail_url(product.pk))
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b''
        assert Product.objects.get(pk=product.pk).is_active is False

    def test_deactivate_with_stock_conflict(self, staff_client):
        product = ProductFactory(initial_stock=5)
        response = staff_client.delete(_detail_url(product.pk))
        assert response.status_code == status.HTTP_409_CONFLICT
        body = response.json()
        assert body['code'] == 'PRODUCT_HAS_STOCK'
        assert body['errors']['current_quantity'] == 5
        assert Product.objects.get(pk=product.pk).is_active is True

    def test_deactivate_twice_not_found(self, staff_client):
        product = ProductFactory()
        staff_client.delete(_detail_url(product.pk))
        response = staff_client.delete(_detail_url(product.pk))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_regular_user_cannot_deactivate(self, authenticated_client):
        product = ProductFactory()
        response = authenticated_client.delete(_detail_url(product.pk))
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Product.objects.get(pk=product.pk).is_active is True
