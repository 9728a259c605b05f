# controllers/classes/classes.py
"""
Class catalog routes: list, create, update and delete class definitions.
"""

import logging

from flask import jsonify
from flask_login import login_required

from gym_scheduler.controllers import json_payload, json_form, submitted_data, validation_error
from gym_scheduler.models import RoleType
from gym_scheduler.services import CatalogService
from gym_scheduler.utils.auth import role_required, tenant_required, current_gym_id
from gym_scheduler.utils.serializers import serialize_class
from .forms import ClassForm, ClassUpdateForm

from . import classes_bp

logger = logging.getLogger('classes_api')


@classes_bp.route('', methods=['GET'])
@login_required
@tenant_required
def list_classes():
    """All class definitions of the caller's gym, ordered by name."""
    classes = CatalogService.list_classes(current_gym_id())
    return jsonify({
        'success': True,
        'classes': [serialize_class(c) for c in classes]
    })


@classes_bp.route('', methods=['POST'])
@login_required
@role_required(*RoleType.SCHEDULERS)
@tenant_required
def create_class():
    payload = json_payload()
    form = json_form(ClassForm, payload)
    if not form.validate():
        return validation_error(form)

    fitness_class = CatalogService.create_class(current_gym_id(), submitted_data(form, payload))

    return jsonify({
        'success': True,
        'message': 'Class created successfully',
        'class': serialize_class(fitness_class)
    }), 201


@classes_bp.route('/category/<category>', methods=['GET'])
@login_required
@tenant_required
def list_classes_by_category(category):
    """Active classes of one category."""
    classes = CatalogService.list_classes_by_category(current_gym_id(), category)
    return jsonify({
        'success': True,
        'category': category,
        'classes': [serialize_class(c) for c in classes]
    })


@classes_bp.route('/<class_id>', methods=['GET'])
@login_required
@tenant_required
def get_class(class_id):
    fitness_class = CatalogService.get_class(current_gym_id(), class_id)
    return jsonify({'success': True, 'class': serialize_class(fitness_class)})


@classes_bp.route('/<class_id>', methods=['PUT'])
@login_required
@role_required(*RoleType.SCHEDULERS)
@tenant_required
def update_class(class_id):
    payload = json_payload()
    form = json_form(ClassUpdateForm, payload)
    if not form.validate():
        return validation_error(form)

    fitness_class = CatalogService.update_class(current_gym_id(), class_id, submitted_data(form, payload))

    return jsonify({
        'success': True,
        'message': 'Class updated successfully',
        'class': serialize_class(fitness_class)
    })


@classes_bp.route('/<class_id>', methods=['DELETE'])
@login_required
@role_required(*RoleType.SCHEDULERS)
@tenant_required
def delete_class(class_id):
    CatalogService.delete_class(current_gym_id(), class_id)
    logger.info(f"Class {class_id} deleted via API")
    return jsonify({'success': True, 'message': 'Class deleted successfully'})
