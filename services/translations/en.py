# -*- coding: utf-8 -*-
"""English translations."""

EN_TRANSLATIONS = {
    # Notification titles
    "dialog.error": "Error",
    "dialog.validation_error": "Validation Error",
    "dialog.warning": "Warning",
    "dialog.success": "Success",

    # Change types
    "change_type.cancellation": "Cancellation",
    "change_type.substitution": "Substitution",
    "change_type.transfer": "Transfer",

    # Step titles
    "step.change_type": "Change Type",
    "step.select_program": "Select Program",
    "step.transfer_details": "Transfer Details",
    "step.review": "Review",
    "step.complete": "Complete",
    "step.cancellation_fee": "Cancellation Fee",
    "step.settlement": "Settlement",
    "step.select_contact": "Select Substitute",
    "step.review_and_execute": "Review & Execute",
    "step.progress": "Step {current} of {total}",

    # Validation
    "validation.select_change_type": "Please select a change type.",
    "validation.select_program": "Please select a program to transfer to.",
    "validation.fee_required": "Please enter the new program fee amount.",
    "validation.fee_negative": "Program fee amount cannot be negative.",
    "validation.discount_required": "Please enter either a discount amount or a discount code.",
    "validation.cancellation_fee": "Please enter a valid cancellation fee amount.",
    "validation.select_settlement": "Please select a settlement type.",
    "validation.select_contact": "Please select a substitute contact.",

    # Resolution failures
    "error.registrant_unresolved": "Unable to determine Registrant ID. Please refresh and try again.",
    "error.no_contact_selected": "No substitute contact selected.",
    "error.no_program_selected": "No target program selected.",
    "error.not_loaded": "Registration data has not been loaded.",

    # Load faults
    "error.program_details_failed": "Failed to load program details: {message}",
    "error.contact_search_failed": "Failed to search contacts: {message}",
    "error.api.connection": "Unable to reach the server. Please check your connection and try again.",
    "error.api.timeout": "The server took too long to respond. Please try again.",

    # Execute outcomes
    "transfer.success_title": "Transfer Successful",
    "transfer.success": "{name} transferred to {program}",
    "transfer.failed_title": "Transfer Failed",
    "cancellation.success_title": "Cancellation Successful",
    "cancellation.success": "{name}'s registration has been cancelled.",
    "cancellation.failed_title": "Cancellation Failed",
    "substitution.success_title": "Substitution Successful",
    "substitution.success": "{name} has been substituted with {contact}.",
    "substitution.failed_title": "Substitution Failed",

    # Buttons
    "button.processing": "Processing...",
    "button.execute_transfer": "Execute Transfer",
    "button.execute_cancellation": "Execute Cancellation",
    "button.execute_substitution": "Execute Substitution",

    # Settlement options
    "settlement.none": "-- None --",
    "settlement.refund": "Refund",
    "settlement.unapplied_funds": "Unapplied Funds",
    "settlement.apply_to_balance": "Apply to Remaining Balance",

    # Settlement descriptions
    "settlement.transfer.refund": "A refund payment record will be created for the net credit amount.",
    "settlement.transfer.unapplied_funds": "An Unapplied Funds record will be created and linked to both opportunities.",
    "settlement.cancel.refund": "A Task will be created to process the refund for {amount}.",
    "settlement.cancel.unapplied_funds": "An Unapplied Funds record will be created for {amount}.",
    "settlement.cancel.apply_to_balance": "The amount will be applied to the remaining balance on the bundled registration.",

    # Substitution
    "substitution.discount_applied": "(Applied)",
    "substitution.discount_not_applied": "(Not Applied)",

    # Misc
    "mapping.not_available": "N/A",
}
