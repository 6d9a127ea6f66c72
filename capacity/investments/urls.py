from django.urls import path

from . import views

urlpatterns = [
    path('equipment/', views.equipment, name='investment-equipment'),
    path('equipment/statistics/', views.equipment_statistics, name='investment-equipment-statistics'),
    path('products/rankings/', views.product_rankings, name='investment-product-rankings'),
    path('products/weights/', views.product_weights, name='investment-product-weights'),
    path('scenarios/', views.scenario_list, name='investment-scenarios'),
    path('scenarios/<str:key>/', views.scenario_detail, name='investment-scenario-detail'),
    path('import/', views.import_data, name='investment-import'),
    path('export/', views.export_data, name='investment-export'),
]
