from django.urls import path

from . import views

urlpatterns = [
    # Mode selection
    path('', views.home, name='home'),

    # Customer screen
    path('order/', views.place_order, name='place_order'),
    path('order/quote.json', views.quote, name='quote'),

    # Kitchen screen
    path('kitchen/', views.kitchen, name='kitchen'),
    path('kitchen/board.json', views.board_json, name='board_json'),
    path('kitchen/orders/<int:order_number>/advance/', views.advance_order, name='advance_order'),

    # Connection
    path('status.json', views.connection_status, name='connection_status'),
]
