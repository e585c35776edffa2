"""
Serializers for the shed registry.
"""

from rest_framework import serializers

from .models import Shed, WorkerAssignment


class ShedSerializer(serializers.ModelSerializer):
    """Serializer for creating, viewing and editing sheds"""
    variant_display = serializers.CharField(source='get_variant_display', read_only=True)
    created_by_name = serializers.CharField(source='created_by.get_full_name', read_only=True, allow_null=True)

    class Meta:
        model = Shed
        fields = [
            'id', 'name', 'variant', 'variant_display', 'description',
            'capacity', 'number_of_birds', 'is_active',
            'created_by', 'created_by_name', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Shed name is required')
        return value

    def validate(self, attrs):
        capacity = attrs.get('capacity', getattr(self.instance, 'capacity', 0))
        number_of_birds = attrs.get('number_of_birds', getattr(self.instance, 'number_of_birds', 0))
        if capacity and number_of_birds > capacity:
            raise serializers.ValidationError({
                'number_of_birds': f'Number of birds ({number_of_birds}) cannot exceed capacity ({capacity})'
            })
        return attrs


class WorkerAssignmentSerializer(serializers.ModelSerializer):
    """Read serializer for worker assignments"""
    worker_name = serializers.CharField(source='worker.get_full_name', read_only=True)
    shed_name = serializers.CharField(source='shed.name', read_only=True)

    class Meta:
        model = WorkerAssignment
        fields = [
            'id', 'worker', 'worker_name', 'shed', 'shed_name',
            'assigned_by', 'assigned_at', 'is_active'
        ]
        read_only_fields = fields
