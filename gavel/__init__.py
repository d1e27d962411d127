
from gavel.argument import Arg, ArgKind

from gavel.checks import NumType, NumLimit

from gavel.values import (TEXT,
                          INT32,
                          UINT32,
                          INT64,
                          UINT64,
                          FLOAT32,
                          FLOAT64)

from gavel.errors import (GavelException,
                          DeclarationError,
                          ArgumentParseError,
                          ScanError,
                          UnknownOption,
                          MissingOptionValue,
                          UnexpectedOptionValue,
                          MissingRequiredArgument,
                          MissingPositionalArgument,
                          RangeViolation,
                          ChoiceViolation,
                          ConflictsWithAllViolation,
                          RelatedGroupViolation,
                          ConflictGroupViolation,
                          OneRequiredGroupViolation,
                          UnknownGroupMember,
                          MissingSubcommand,
                          QueryError,
                          UnknownArgument,
                          MissingValue,
                          PositionOutOfRange,
                          NoSubcommand,
                          HelpRequested,
                          CommandLineError,
                          ErrorChannel)

from gavel.command import Command
